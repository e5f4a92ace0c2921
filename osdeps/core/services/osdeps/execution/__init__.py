"""
L4 Execution — ``__init__.py`` re-exports all execution functions.

These functions WRITE to the system or block on it: subprocess calls
and the machine-wide install lock.
"""

from osdeps.core.services.osdeps.execution.install_lock import (  # noqa: F401
    InstallLock,
)
from osdeps.core.services.osdeps.execution.privileged_runner import (  # noqa: F401
    build_root_env,
    execute,
)
