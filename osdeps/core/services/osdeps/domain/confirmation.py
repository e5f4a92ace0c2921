"""
L1 Domain — Install confirmation gate.

Decides whether an install proceeds. The decision itself is pure;
only the manual branch talks to the user, and only there do we block
on stdin.
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Sequence

import click


class InstallMode(str, enum.Enum):
    FORCE = "force"     # install regardless of configuration
    AUTO = "auto"       # manager enabled in osdeps_mode
    MANUAL = "manual"   # show instructions, let the user do it


class Decision(str, enum.Enum):
    PROCEED = "proceed"
    DECLINE = "decline"
    DISPLAY = "display"   # print instructions, wait for ENTER, then decline


def resolve_install_mode(osdeps_mode: str, manager: str, force: bool = False) -> InstallMode:
    """Map the ``osdeps_mode`` option to this manager's mode.

    ``all`` enables every manager, ``none`` none of them; otherwise the
    value is a comma-separated list of enabled manager names.
    """
    if force:
        return InstallMode.FORCE
    enabled = {name.strip() for name in str(osdeps_mode).split(",") if name.strip()}
    if "all" in enabled or manager in enabled:
        return InstallMode.AUTO
    return InstallMode.MANUAL


def decide(mode: InstallMode, silent: bool) -> Decision:
    if mode is InstallMode.FORCE or mode is InstallMode.AUTO:
        return Decision.PROCEED
    if silent:
        return Decision.DECLINE
    return Decision.DISPLAY


def manual_install_message(
    packages: Sequence[str],
    user_script: str,
    can_filter: bool = True,
) -> str:
    lines = [
        "",
        click.style(
            "The build process and/or the packages require some other software to be installed",
            bold=True,
        ),
        click.style("and you required osdeps to not install them itself", bold=True),
    ]
    if not can_filter:
        lines += [
            "",
            click.style("If these packages are already installed, simply ignore this message", fg="red"),
        ]
    lines += [
        "",
        "The following packages are available as OS dependencies, i.e. as prebuilt",
        "packages provided by your distribution / operating system. You will have to",
        "install them manually if they are not already installed",
        "",
        *(f"    {pkg}" for pkg in sorted(packages)),
        "",
        "the following command line(s) can be run as root to install them:",
        "",
        *(f"|   {line}" for line in user_script.splitlines()),
        "",
    ]
    return "\n".join(lines)


def confirm_install(
    mode: InstallMode,
    silent: bool,
    packages: Sequence[str],
    user_script: str,
    *,
    can_filter: bool = True,
    prompt: Callable[..., str] = click.prompt,
) -> bool:
    """Return True when the install should run now.

    Args:
        mode: Configured install mode for this manager.
        silent: Suppress the manual instructions entirely.
        packages: Package names that would be installed.
        user_script: The user-facing command line.
        can_filter: Whether the manager filtered out installed packages.
        prompt: Acknowledgment reader (``click.prompt`` signature).
    """
    decision = decide(mode, silent)
    if decision is Decision.PROCEED:
        return True
    if decision is Decision.DECLINE:
        return False

    click.echo(manual_install_message(packages, user_script, can_filter))
    prompt(
        click.style("    Press ENTER to continue", bold=True),
        default="",
        show_default=False,
        prompt_suffix=" ",
    )
    click.echo()
    return False
