"""
OS dependency service — package re-exports.

Each symbol lives in its single-responsibility module inside the
appropriate onion layer (data → domain → detection → execution →
managers). Callers only need::

    from osdeps.core.services.osdeps import get_manager
"""

# ── L1: Domain ──
from osdeps.core.errors import (  # noqa: F401
    ConfigurationError,
    InstallFailure,
    OsdepsError,
    QueryFailure,
    ResolutionAmbiguity,
)

# ── L4: Execution ──
from osdeps.core.services.osdeps.execution.install_lock import InstallLock  # noqa: F401
from osdeps.core.services.osdeps.execution.privileged_runner import execute  # noqa: F401

# ── L5: Managers ──
from osdeps.core.services.osdeps.managers import (  # noqa: F401
    EmergeManager,
    Manager,
    ShellScriptManager,
    available_managers,
    get_manager,
)
