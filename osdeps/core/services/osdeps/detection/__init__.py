"""
L3 Detection — ``__init__.py`` re-exports all read-only probes.
"""

from osdeps.core.services.osdeps.detection.output_resolver import (  # noqa: F401
    DryRunResolver,
)
from osdeps.core.services.osdeps.detection.pkg_db import (  # noqa: F401
    probe_installed,
)
