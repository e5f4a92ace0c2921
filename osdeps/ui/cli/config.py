"""
CLI commands for the workspace configuration (osdeps.yml).
"""

from __future__ import annotations

import json
import sys

import click

from osdeps.core.errors import ConfigurationError


@click.group()
def config() -> None:
    """Config — show and persist workspace options."""


@config.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def show(ctx: click.Context, as_json: bool) -> None:
    """Show declared options and their effective values."""
    from osdeps.core.config.loader import load_config
    from osdeps.core.services.osdeps import available_managers, get_manager

    try:
        cfg = load_config(ctx.obj.get("config_path"))
        for name in available_managers():
            get_manager(name, cfg).configure()
        values = {decl.name: cfg.get(decl.name) for decl in cfg.declarations}
    except ConfigurationError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(values, indent=2))
        return

    click.secho(f"⚙️  {cfg.path}", fg="cyan", bold=True)
    for name, value in values.items():
        marker = "" if cfg.has_value(name) else "  (default)"
        click.echo(f"   {name}: {value}{marker}")


@config.command("set")
@click.argument("name")
@click.argument("value")
@click.pass_context
def set_option(ctx: click.Context, name: str, value: str) -> None:
    """Persist NAME=VALUE in osdeps.yml."""
    from osdeps.core.config.loader import load_config
    from osdeps.core.services.osdeps import available_managers, get_manager

    try:
        cfg = load_config(ctx.obj.get("config_path"))
        for manager in available_managers():
            get_manager(manager, cfg).configure()
        cfg.set(name, value, user_validated=True)
        path = cfg.save()
    except ConfigurationError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    click.secho(f"✅ {name} = {cfg.get(name)} ({path})", fg="green")
