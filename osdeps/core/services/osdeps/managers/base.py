"""
Manager base — the contract between build-ordering code and the OS.

Callers only ever ask four things of a package manager:

    installed(atom)  — is it there?
    updated(atom)    — is it there and current?
    install(atoms)   — make it so; True iff an install actually ran
    configure()      — declare the manager's configuration switches

To add a manager family:
    1. Subclass Manager (usually through ShellScriptManager)
    2. Implement name, installed, updated, install
    3. Register it in ``managers.registry``
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any

from osdeps.core.config.loader import WorkspaceConfig
from osdeps.core.models.atom import Atom
from osdeps.core.services.osdeps.domain.confirmation import (
    InstallMode,
    resolve_install_mode,
)


def as_atom(value: Atom | str) -> Atom:
    return value if isinstance(value, Atom) else Atom.parse(value)


class Manager(ABC):
    """Abstract base class for all package managers."""

    def __init__(
        self,
        config: WorkspaceConfig,
        *,
        force: bool = False,
        silent: bool | None = None,
        env: Mapping[str, str] | None = None,
    ):
        self.config = config
        self.force = force
        self._silent = silent
        self.env = env

    @property
    @abstractmethod
    def name(self) -> str:
        """The manager identifier (e.g. 'emerge', 'apt-dpkg')."""

    @abstractmethod
    def installed(self, atom: Atom | str) -> bool:
        """Whether ``atom`` is installed."""

    @abstractmethod
    def updated(self, atom: Atom | str) -> bool:
        """Whether ``atom`` is installed and up to date."""

    @abstractmethod
    def install(
        self,
        atoms: Iterable[Atom | str],
        *,
        filter_up_to_date: bool = False,
        install_only: bool = False,
    ) -> bool:
        """Install what is needed of ``atoms``.

        Returns:
            True iff an install command ran and succeeded.

        Raises:
            ConfigurationError: No usable install command.
        """

    def configure(self) -> dict[str, Any]:
        """Declare this manager's switches; return their effective values."""
        return {}

    @property
    def install_mode(self) -> InstallMode:
        return resolve_install_mode(self.config.get("osdeps_mode"), self.name, self.force)

    @property
    def enabled(self) -> bool:
        return self.install_mode is not InstallMode.MANUAL

    @property
    def silent(self) -> bool:
        if self._silent is not None:
            return self._silent
        return bool(self.config.get("osdeps_silent"))

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
