"""
Manager registry — build a manager from its family name.
"""

from __future__ import annotations

import logging
from typing import Any

from osdeps.core.config.loader import WorkspaceConfig
from osdeps.core.errors import ConfigurationError
from osdeps.core.services.osdeps.data.manager_presets import MANAGER_PRESETS
from osdeps.core.services.osdeps.managers.base import Manager
from osdeps.core.services.osdeps.managers.emerge import EmergeManager
from osdeps.core.services.osdeps.managers.shell_script import ShellScriptManager

logger = logging.getLogger(__name__)

# Families with their own class; the rest are plain shell-script presets.
MANAGER_TYPES: dict[str, type[ShellScriptManager]] = {
    "emerge": EmergeManager,
}


def available_managers() -> list[str]:
    return sorted(set(MANAGER_PRESETS) | set(MANAGER_TYPES))


def get_manager(name: str, config: WorkspaceConfig, **kwargs: Any) -> Manager:
    """Instantiate the manager called ``name``.

    Raises:
        ConfigurationError: No such manager family.
    """
    manager_cls = MANAGER_TYPES.get(name)
    if manager_cls is not None:
        manager: Manager = manager_cls(config, **kwargs)
    elif name in MANAGER_PRESETS:
        manager = ShellScriptManager.from_preset(config, name, **kwargs)
    else:
        raise ConfigurationError(
            f"Unknown package manager: {name} "
            f"(available: {', '.join(available_managers())})"
        )
    logger.debug("Created %r", manager)
    return manager
