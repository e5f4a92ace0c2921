"""
osdeps — CLI entrypoint.

Usage:
    python -m osdeps.main --help
    python -m osdeps.main installed emerge sys-apps/foo
    python -m osdeps.main install emerge --filter-up-to-date '>=dev-libs/bar-1.0'
"""

from __future__ import annotations

import os
from pathlib import Path

import click

from osdeps import __version__
from osdeps.core.observability.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="osdeps")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to osdeps.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """osdeps — check and install OS package dependencies."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("OSDEPS_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("OSDEPS_LOG_FILE"),
        log_file_level=os.environ.get("OSDEPS_LOG_FILE_LEVEL"),
    )


@cli.command()
def managers() -> None:
    """List supported package managers."""
    from osdeps.core.services.osdeps import available_managers
    from osdeps.core.services.osdeps.data.manager_presets import MANAGER_PRESETS

    for name in available_managers():
        preset = MANAGER_PRESETS.get(name, {})
        flags = []
        if preset.get("needs_root"):
            flags.append("root")
        if preset.get("needs_locking"):
            flags.append("locking")
        suffix = f"  ({', '.join(flags)})" if flags else ""
        click.echo(f"   {name}{suffix}")


# ── Register sub-commands ──────────────────────────────────────

from osdeps.ui.cli.config import config  # noqa: E402
from osdeps.ui.cli.packages import configure, install, installed, updated  # noqa: E402

cli.add_command(installed)
cli.add_command(updated)
cli.add_command(install)
cli.add_command(configure)
cli.add_command(config)


if __name__ == "__main__":
    cli()
