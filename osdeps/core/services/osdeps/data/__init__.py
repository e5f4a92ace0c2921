"""
L0 Data — ``__init__.py`` re-exports all data constants.
"""

from osdeps.core.services.osdeps.data.constants import (  # noqa: F401
    LOCK_PATH,
    LOCK_RETRY_SECONDS,
    PORTAGE_PKG_DB,
    PRIVILEGED_PATH,
)
from osdeps.core.services.osdeps.data.manager_presets import (  # noqa: F401
    MANAGER_PRESETS,
)
from osdeps.core.services.osdeps.data.output_tables import (  # noqa: F401
    OUTPUT_TABLES,
)
