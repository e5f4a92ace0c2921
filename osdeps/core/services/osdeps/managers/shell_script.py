"""
Shell-script managers — install by running one command line.

apt, yum, pacman, pip, ... all boil down to "<command> <packages>".
They cannot tell us what is installed, so ``installed``/``updated``
answer False and ``install`` runs on everything it is given: a
redundant install is harmless, a skipped one is not.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

import click

from osdeps.core.config.loader import WorkspaceConfig
from osdeps.core.errors import ConfigurationError, InstallFailure
from osdeps.core.models.atom import Atom
from osdeps.core.models.policy import CommandTemplate, ExecutionPolicy
from osdeps.core.services.osdeps.data.manager_presets import MANAGER_PRESETS
from osdeps.core.services.osdeps.domain.command_template import (
    expand,
    generate_auto_script,
    generate_user_script,
)
from osdeps.core.services.osdeps.domain.confirmation import confirm_install
from osdeps.core.services.osdeps.execution.install_lock import InstallLock
from osdeps.core.services.osdeps.execution.privileged_runner import execute
from osdeps.core.services.osdeps.managers.base import Manager, as_atom

logger = logging.getLogger(__name__)

Runner = Callable[..., dict[str, Any]]


class ShellScriptManager(Manager):
    """A manager driven by an install command template."""

    # Whether install() drops packages that need nothing.
    can_filter = False

    def __init__(
        self,
        config: WorkspaceConfig,
        name: str,
        template: CommandTemplate,
        policy: ExecutionPolicy,
        *,
        runner: Runner = execute,
        lock: InstallLock | None = None,
        prompt: Callable[..., str] = click.prompt,
        **kwargs: Any,
    ):
        super().__init__(config, **kwargs)
        self._name = name
        self.template = template
        self.policy = policy
        self._runner = runner
        self._lock = lock
        self._prompt = prompt

    @classmethod
    def from_preset(
        cls,
        config: WorkspaceConfig,
        name: str,
        *,
        inherit: Iterable[str] = (),
        **kwargs: Any,
    ) -> ShellScriptManager:
        preset = MANAGER_PRESETS.get(name)
        if preset is None:
            raise ConfigurationError(f"Unknown package manager: {name}")
        template, policy = preset_parts(preset, inherit)
        return cls(config, name, template, policy, **kwargs)

    @property
    def name(self) -> str:
        return self._name

    def installed(self, atom: Atom | str) -> bool:
        logger.debug("%s cannot query package state, assuming %s is missing", self.name, atom)
        return False

    def updated(self, atom: Atom | str) -> bool:
        return False

    def install(
        self,
        atoms: Iterable[Atom | str],
        *,
        filter_up_to_date: bool = False,
        install_only: bool = False,
    ) -> bool:
        packages = [as_atom(atom).raw for atom in atoms]
        return self.install_packages(packages)

    def install_packages(self, packages: Sequence[str]) -> bool:
        """Confirm, then run the automatic install command for ``packages``."""
        packages = list(dict.fromkeys(packages))
        if not packages:
            return False

        auto_script = generate_auto_script(self.template, packages)
        user_script = generate_user_script(self.template, packages)

        if not confirm_install(
            self.install_mode, self.silent, packages, user_script,
            can_filter=self.can_filter, prompt=self._prompt,
        ):
            logger.info("Not installing %s packages: %s", self.name, ", ".join(sorted(packages)))
            return False

        message = f"  installing OS packages: {', '.join(sorted(packages))}"
        if self.policy.needs_root:
            # Always say why credentials are about to be requested.
            click.echo(message)
        else:
            logger.info(message)
        logger.info("Generated installation script for %s:\n%s", self.name, auto_script)

        try:
            self._run_install(packages)
        except InstallFailure as e:
            logger.error("%s", e)
            return False
        return True

    def _run_install(self, packages: list[str]) -> dict[str, Any]:
        result = self._runner(
            expand(self.template.auto, packages),
            needs_locking=self.policy.needs_locking,
            needs_root=self.policy.needs_root,
            env=self.env,
            inherit=self.policy.inherit,
            lock=self._lock,
            capture=False,
        )
        if not result["ok"]:
            raise InstallFailure(packages, result.get("returncode", -1), result.get("error", ""))
        return result


def preset_parts(
    preset: Mapping[str, Any],
    inherit: Iterable[str] = (),
) -> tuple[CommandTemplate, ExecutionPolicy]:
    """Split a ``MANAGER_PRESETS`` entry into template and policy."""
    user = preset.get("user_install")
    auto = preset.get("auto_install")
    template = CommandTemplate(
        user=tuple(user) if user else None,
        auto=tuple(auto) if auto else None,
    )
    policy = ExecutionPolicy(
        needs_root=preset.get("needs_root", True),
        needs_locking=preset.get("needs_locking", True),
        inherit=frozenset(preset.get("inherit", ())) | frozenset(inherit),
    )
    return template, policy
