"""
Domain models — Pydantic types for the package-state resolver.

All models are re-exported here for convenient access:

    from osdeps.core.models import Atom, InstallState, StateCache
"""

from osdeps.core.models.atom import Atom, derive_name
from osdeps.core.models.policy import PACKAGE_SLOT, CommandTemplate, ExecutionPolicy
from osdeps.core.models.state import InstallState, StateCache

__all__ = [
    # atom.py
    "Atom",
    # policy.py
    "CommandTemplate",
    "ExecutionPolicy",
    # state.py
    "InstallState",
    "PACKAGE_SLOT",
    "StateCache",
    "derive_name",
]
