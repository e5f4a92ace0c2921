"""
L1 Domain — Command template engine (pure).

Turns a configured command pattern plus a package list into either an
argv list (what we execute) or a shell-quoted string (what we show).
No I/O, no subprocess.
"""

from __future__ import annotations

import shlex
from collections.abc import Sequence

from osdeps.core.errors import ConfigurationError
from osdeps.core.models.policy import PACKAGE_SLOT, CommandTemplate


def expand(pattern: Sequence[str] | None, packages: Sequence[str]) -> list[str]:
    """Substitute ``packages`` at the pattern's slot.

    Each package stays a single argument. Without a ``%s`` token the
    packages are appended.

    Raises:
        ConfigurationError: If ``pattern`` is missing or empty.
    """
    if not pattern:
        raise ConfigurationError("No install command template configured")

    tokens = list(pattern)
    if PACKAGE_SLOT not in tokens:
        return tokens + list(packages)

    argv: list[str] = []
    for token in tokens:
        if token == PACKAGE_SLOT:
            argv.extend(packages)
        else:
            argv.append(token)
    return argv


def generate(pattern: Sequence[str] | None, packages: Sequence[str]) -> str:
    """Render the command as one shell line, every token quoted."""
    return shlex.join(expand(pattern, packages))


def generate_auto_script(template: CommandTemplate, packages: Sequence[str]) -> str:
    """Command line used for unattended installs. Never falls back."""
    if not template.auto:
        raise ConfigurationError(
            "No automatic install command configured for this package manager"
        )
    return generate(template.auto, packages)


def generate_user_script(template: CommandTemplate, packages: Sequence[str]) -> str:
    """Command line shown to the user; uses ``auto`` when no ``user`` exists."""
    if template.user:
        return generate(template.user, packages)
    return generate_auto_script(template, packages)
