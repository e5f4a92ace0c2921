"""
Emerge manager — Gentoo's portage, the one family we can truly query.

State comes from two places:
    - the installed-package database, for plain ``installed`` checks
    - ``emerge -p1 --nodeps`` dry-runs, for everything else

Both land in a StateCache owned by this instance, which is thrown away
wholesale after every successful install: an install can change
states we have no way to attribute atom by atom.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from osdeps.core.config.loader import WorkspaceConfig
from osdeps.core.errors import ResolutionAmbiguity
from osdeps.core.models.atom import Atom
from osdeps.core.models.state import InstallState, StateCache
from osdeps.core.services.osdeps.data.constants import PORTAGE_PKG_DB
from osdeps.core.services.osdeps.data.manager_presets import MANAGER_PRESETS
from osdeps.core.services.osdeps.data.output_tables import OUTPUT_TABLES
from osdeps.core.services.osdeps.detection.output_resolver import DryRunResolver
from osdeps.core.services.osdeps.detection.pkg_db import probe_installed
from osdeps.core.services.osdeps.domain.output_parsing import OutputTable
from osdeps.core.services.osdeps.managers.base import as_atom
from osdeps.core.services.osdeps.managers.shell_script import (
    ShellScriptManager,
    preset_parts,
)

logger = logging.getLogger(__name__)

KEEP_UP_TO_DATE_OPTION = "emerge_update"


class EmergeManager(ShellScriptManager):
    """Package manager interface for systems that use emerge."""

    can_filter = True

    # Variables handed through to root installs, for every instance.
    # Subclasses extend it by assignment; instances by the constructor.
    inherit: frozenset[str] = frozenset()

    def __init__(
        self,
        config: WorkspaceConfig,
        *,
        pkg_db: Path | None = Path(PORTAGE_PKG_DB),
        inherit: Iterable[str] = (),
        **kwargs: Any,
    ):
        template, policy = preset_parts(
            MANAGER_PRESETS["emerge"], frozenset(inherit) | type(self).inherit,
        )
        super().__init__(config, "emerge", template, policy, **kwargs)
        self.pkg_db = pkg_db
        self.cache = StateCache()
        self.resolver = DryRunResolver(
            OutputTable.from_data("emerge", OUTPUT_TABLES["emerge"]),
            self.cache,
            runner=self._runner,
            env=self.env,
        )
        self.configure()

    def configure(self) -> dict[str, Any]:
        if self.config.declared(KEEP_UP_TO_DATE_OPTION) is None:
            self.config.declare(
                KEEP_UP_TO_DATE_OPTION, "boolean", default="yes",
                doc=["Would you like osdeps to keep emerge packages up-to-date?"],
            )
        return {KEEP_UP_TO_DATE_OPTION: self.keep_up_to_date}

    @property
    def keep_up_to_date(self) -> bool:
        return bool(self.config.get(KEEP_UP_TO_DATE_OPTION))

    @keep_up_to_date.setter
    def keep_up_to_date(self, flag: bool) -> None:
        self.config.set(KEEP_UP_TO_DATE_OPTION, flag, user_validated=True)

    @property
    def diagnostics(self) -> list[str]:
        return self.resolver.diagnostics

    # ── Queries ──────────────────────────────────────────────────

    def installed(self, atom: Atom | str) -> bool:
        atom = as_atom(atom)
        state = self.cache.get(atom.raw)
        if state is None:
            self._update_package_information(atom)
            state = self.cache.get(atom.raw)
        return bool(state and state.installed)

    def updated(self, atom: Atom | str) -> bool:
        atom = as_atom(atom)
        state = self.cache.get(atom.raw)
        if state is None or state.up_to_date is None:
            self.resolver.resolve([atom])
            state = self.cache.get(atom.raw)
        return bool(state and state.up_to_date)

    def _update_package_information(self, atom: Atom) -> None:
        if self.pkg_db is not None:
            try:
                found = probe_installed(atom, self.pkg_db)
            except ResolutionAmbiguity as e:
                self.resolver.report(str(e))
                self.cache.set(atom.raw, InstallState.missing())
                return
            if found is not None:
                self.cache.set(
                    atom.raw,
                    InstallState(installed=found, up_to_date=None if found else False),
                )
                return
        self.resolver.resolve([atom])

    # ── Install ──────────────────────────────────────────────────

    def install(
        self,
        atoms: Iterable[Atom | str],
        *,
        filter_up_to_date: bool = False,
        install_only: bool = False,
    ) -> bool:
        selected = [as_atom(atom) for atom in atoms]

        if filter_up_to_date or install_only:
            already_installed: list[Atom] = []
            missing: list[Atom] = []
            for atom in selected:
                (already_installed if self.installed(atom) else missing).append(atom)

            need_update: list[Atom] = []
            if self.keep_up_to_date and not install_only and already_installed:
                self.resolver.resolve(already_installed)
                need_update = [atom for atom in already_installed if not self.updated(atom)]
            selected = missing + need_update

        if self.install_packages([atom.raw for atom in selected]):
            # Invalidate everything: we just installed new packages.
            self.cache.clear()
            return True
        return False
