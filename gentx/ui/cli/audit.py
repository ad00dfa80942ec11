"""
CLI commands for the audit ledger.

Usage::

    gentx audit log
    gentx audit log -n 5 --json
"""

from __future__ import annotations

import json
import sys

import click


@click.group()
def audit() -> None:
    """Audit — history of generator runs."""


@audit.command()
@click.option("-n", "count", default=20, show_default=True, help="Number of entries.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def log(ctx: click.Context, count: int, as_json: bool) -> None:
    """Show the most recent generator runs."""
    from gentx.core.config.loader import find_config_file, load_config, project_root
    from gentx.core.errors import ConfigError
    from gentx.core.persistence.audit import AuditWriter

    config_path = ctx.obj.get("config_path") or find_config_file()
    try:
        config = load_config(config_path)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    writer = AuditWriter(path=project_root(config_path) / config.audit.path)
    entries = writer.read_recent(count)

    if as_json:
        click.echo(json.dumps([e.model_dump(mode="json") for e in entries], indent=2))
        return

    if not entries:
        click.echo("No generator runs recorded.")
        return

    colors = {"applied": "green", "skipped": "yellow", "aborted": "red"}
    click.secho(f"\n📜 Last {len(entries)} runs ({writer.path})", fg="cyan", bold=True)
    for entry in entries:
        click.echo(f"   {entry.timestamp[:19]}  {entry.generator:<20} ", nl=False)
        click.secho(entry.outcome, fg=colors.get(entry.outcome, "white"), nl=False)
        touched = len(entry.created) + len(entry.modified) + len(entry.deleted)
        click.echo(f"  ({touched} files)")
        for err in entry.errors:
            click.echo(f"     │ {err}")
        if not entry.errors and entry.context.get("message"):
            click.echo(f"     │ {entry.context['message']}")
    click.echo()
