"""
Command templates and execution policy — fixed per manager instance.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# Token replaced by the package list; appended at the end when absent.
PACKAGE_SLOT = "%s"


class CommandTemplate(BaseModel):
    """Install command patterns for one manager.

    ``auto`` runs unattended; ``user`` is what we display when the user
    opted to install packages themselves. Either may be missing.
    """

    model_config = ConfigDict(frozen=True)

    auto: tuple[str, ...] | None = None
    user: tuple[str, ...] | None = None


class ExecutionPolicy(BaseModel):
    """How install commands must be run."""

    model_config = ConfigDict(frozen=True)

    needs_root: bool = True
    needs_locking: bool = True
    inherit: frozenset[str] = Field(default_factory=frozenset)
