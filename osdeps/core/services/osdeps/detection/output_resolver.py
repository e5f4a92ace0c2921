"""
L3 Detection — Dry-run output resolver.

Asks the package manager what it *would* do for a set of atoms and
turns the answer into InstallStates, written to the owner's cache.

Two tiers:
    1. one batch query for every atom, lines matched back by name
    2. one query per atom the batch could not account for

A single bad atom therefore never blocks the others, and the expensive
per-atom queries only run when needed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from osdeps.core.errors import QueryFailure, ResolutionAmbiguity
from osdeps.core.models.atom import Atom
from osdeps.core.models.state import InstallState, StateCache
from osdeps.core.services.osdeps.domain.output_parsing import (
    OutputTable,
    parse_ambiguity,
    parse_output,
)
from osdeps.core.services.osdeps.execution.privileged_runner import execute

logger = logging.getLogger(__name__)

Runner = Callable[..., dict[str, Any]]


class DryRunResolver:
    """Resolve atoms through a manager's side-effect-free query mode.

    Every problem that survives the per-atom fallback is logged as a
    warning and kept in ``diagnostics``; the atom is then recorded as
    not installed.
    """

    def __init__(
        self,
        table: OutputTable,
        cache: StateCache,
        *,
        runner: Runner = execute,
        env: Mapping[str, str] | None = None,
    ):
        self.table = table
        self.cache = cache
        self._runner = runner
        self._env = env
        self.diagnostics: list[str] = []
        self.query_count = 0

    def resolve(self, atoms: Sequence[Atom]) -> dict[Atom, InstallState]:
        unique = list({atom.raw: atom for atom in atoms}.values())
        if not unique:
            return {}

        states = {atom.raw: InstallState.missing() for atom in unique}
        pending = list(unique)

        result = self._query([atom.raw for atom in pending])
        if not result["ok"]:
            logger.info(
                "Batch query for %d package(s) failed (exit %s), "
                "resolving individually where needed",
                len(pending), result.get("returncode"),
            )

        for line in parse_output(self.table, result.get("stdout", "")):
            match = next((atom for atom in pending if atom.name == line.name), None)
            if match is None:
                logger.debug("Ignoring unrequested package in output: %s", line.identifier)
                continue
            states[match.raw] = line.state
            pending.remove(match)

        for atom in pending:
            try:
                states[atom.raw] = self._resolve_one(atom)
            except (QueryFailure, ResolutionAmbiguity) as e:
                self.report(str(e))
                states[atom.raw] = InstallState.missing()

        for atom in unique:
            self.cache.set(atom.raw, states[atom.raw])
        return {atom: states[atom.raw] for atom in unique}

    def _resolve_one(self, atom: Atom) -> InstallState:
        result = self._query([atom.raw])
        output = result.get("stdout", "")
        lines = parse_output(self.table, output)

        if not lines:
            candidates = parse_ambiguity(
                self.table, f"{output}\n{result.get('stderr', '')}",
            )
            if candidates is not None:
                raise ResolutionAmbiguity(atom.raw, candidates)
            raise QueryFailure([atom.raw], result.get("returncode"))

        if not result["ok"]:
            logger.info(
                "Query for '%s' exited %s but reported its state",
                atom.raw, result.get("returncode"),
            )
        # With a single atom the answer is about that atom even when the
        # manager expanded the name (bare name → category/name).
        line = next((ln for ln in lines if ln.name == atom.name), lines[0])
        return line.state

    def _query(self, raw_atoms: list[str]) -> dict[str, Any]:
        self.query_count += 1
        return self._runner(
            [*self.table.query, *raw_atoms],
            needs_locking=False,
            needs_root=False,
            env=self._env,
        )

    def report(self, message: str) -> None:
        self.diagnostics.append(message)
        logger.warning(message)
