"""
CLI commands for OS package state and installation.

Thin wrappers over ``osdeps.core.services.osdeps``.
"""

from __future__ import annotations

import json
import sys
from typing import Any, NoReturn

import click

from osdeps.core.errors import ConfigurationError


def _fail(message: str) -> NoReturn:
    click.secho(f"❌ {message}", fg="red")
    sys.exit(1)


def _get_manager(ctx: click.Context, name: str, **kwargs: Any):
    """Load the workspace config and build the named manager."""
    from osdeps.core.config.loader import load_config
    from osdeps.core.services.osdeps import get_manager

    try:
        config = load_config(ctx.obj.get("config_path"))
        return get_manager(name, config, **kwargs)
    except ConfigurationError as e:
        _fail(str(e))


def _report(results: dict[str, bool], label: str, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps(results, indent=2))
    else:
        for atom, value in results.items():
            icon = "✅" if value else "❌"
            click.echo(f"   {icon} {atom}: {label if value else 'not ' + label}")
    if not all(results.values()):
        sys.exit(1)


# ── Query ───────────────────────────────────────────────────────


@click.command()
@click.argument("manager")
@click.argument("atoms", nargs=-1, required=True)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def installed(ctx: click.Context, manager: str, atoms: tuple[str, ...], as_json: bool) -> None:
    """Check whether ATOMS are installed."""
    mgr = _get_manager(ctx, manager)
    try:
        results = {atom: mgr.installed(atom) for atom in atoms}
    except (ConfigurationError, ValueError) as e:
        _fail(str(e))
    _report(results, "installed", as_json)


@click.command()
@click.argument("manager")
@click.argument("atoms", nargs=-1, required=True)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def updated(ctx: click.Context, manager: str, atoms: tuple[str, ...], as_json: bool) -> None:
    """Check whether ATOMS are installed and up to date."""
    mgr = _get_manager(ctx, manager)
    try:
        results = {atom: mgr.updated(atom) for atom in atoms}
    except (ConfigurationError, ValueError) as e:
        _fail(str(e))
    _report(results, "up to date", as_json)


# ── Act ─────────────────────────────────────────────────────────


@click.command()
@click.argument("manager")
@click.argument("atoms", nargs=-1, required=True)
@click.option(
    "--filter-up-to-date", "filter_up_to_date", is_flag=True,
    help="Skip packages that are installed (and current, if kept up to date).",
)
@click.option("--install-only", is_flag=True, help="Only install missing packages, never update.")
@click.option("--force", is_flag=True, help="Install even if osdeps_mode says not to.")
@click.option("--silent", is_flag=True, help="Do not show manual install instructions.")
@click.pass_context
def install(
    ctx: click.Context,
    manager: str,
    atoms: tuple[str, ...],
    filter_up_to_date: bool,
    install_only: bool,
    force: bool,
    silent: bool,
) -> None:
    """Install ATOMS with MANAGER."""
    mgr = _get_manager(ctx, manager, force=force, silent=silent or None)
    try:
        ran = mgr.install(
            list(atoms),
            filter_up_to_date=filter_up_to_date,
            install_only=install_only,
        )
    except (ConfigurationError, ValueError) as e:
        _fail(str(e))

    if ran:
        click.secho(f"✅ Installed with {manager}: {', '.join(atoms)}", fg="green", bold=True)
    elif not ctx.obj.get("quiet"):
        click.secho("ℹ️  Nothing was installed", fg="yellow")


@click.command()
@click.argument("manager")
@click.pass_context
def configure(ctx: click.Context, manager: str) -> None:
    """Declare MANAGER's configuration switches and show their values."""
    mgr = _get_manager(ctx, manager)
    try:
        values = mgr.configure()
    except ConfigurationError as e:
        _fail(str(e))

    if not values:
        click.echo(f"   {manager} has no configuration switches")
        return
    for name, value in values.items():
        decl = mgr.config.declared(name)
        if decl is not None:
            for line in decl.doc:
                click.secho(f"   # {line}", dim=True)
        click.echo(f"   {name}: {value}")
