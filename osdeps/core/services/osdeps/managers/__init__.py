"""
Manager façades — ``__init__.py`` re-exports the public classes.
"""

from osdeps.core.services.osdeps.managers.base import Manager  # noqa: F401
from osdeps.core.services.osdeps.managers.emerge import EmergeManager  # noqa: F401
from osdeps.core.services.osdeps.managers.registry import (  # noqa: F401
    available_managers,
    get_manager,
)
from osdeps.core.services.osdeps.managers.shell_script import (  # noqa: F401
    ShellScriptManager,
)
