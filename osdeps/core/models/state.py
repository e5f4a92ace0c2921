"""
InstallState and StateCache — what we know about requested atoms.

The cache belongs to exactly one manager instance. It is never shared
across processes and never refreshed behind the owner's back: the only
invalidation is the full ``clear()`` after a successful install.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, model_validator

logger = logging.getLogger(__name__)


class InstallState(BaseModel):
    """Install/update state of one atom.

    ``up_to_date`` is ``None`` when only installation was probed
    (package database fast path) and a dry-run is still needed to
    answer ``updated?``.
    """

    model_config = ConfigDict(frozen=True)

    installed: bool = False
    up_to_date: bool | None = False

    @model_validator(mode="after")
    def _not_current_if_missing(self) -> InstallState:
        if self.up_to_date and not self.installed:
            raise ValueError("a package that is not installed cannot be up to date")
        return self

    @classmethod
    def missing(cls) -> InstallState:
        return cls(installed=False, up_to_date=False)

    @classmethod
    def current(cls) -> InstallState:
        return cls(installed=True, up_to_date=True)

    @classmethod
    def stale(cls) -> InstallState:
        return cls(installed=True, up_to_date=False)


class StateCache:
    """Mapping of raw atom string → InstallState."""

    def __init__(self) -> None:
        self._states: dict[str, InstallState] = {}

    def get(self, raw: str) -> InstallState | None:
        return self._states.get(raw)

    def set(self, raw: str, state: InstallState) -> None:
        self._states[raw] = state

    def copy(self, source: str, target: str) -> None:
        """Attribute an already-resolved state to another raw spelling."""
        state = self._states.get(source)
        if state is None:
            raise KeyError(source)
        self._states[target] = state

    def clear(self) -> None:
        if self._states:
            logger.debug("Clearing %d cached package states", len(self._states))
        self._states = {}

    def __contains__(self, raw: object) -> bool:
        return raw in self._states

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[str]:
        return iter(self._states)

    def __repr__(self) -> str:
        return f"<StateCache entries={len(self._states)}>"
