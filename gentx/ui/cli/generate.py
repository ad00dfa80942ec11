"""
CLI commands for generators — list, check, and run.

Thin wrappers over ``gentx.core.use_cases.generate``.

Usage::

    gentx generate list
    gentx generate check dockerignore
    gentx generate run dockerignore --dry-run
    gentx generate run dockerignore --force --json
"""

from __future__ import annotations

import json
import sys

import click

from gentx.ui.cli.render import render_result


@click.group()
def generate() -> None:
    """Generators — stage, preview, and apply project files."""


@generate.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def list_cmd(as_json: bool) -> None:
    """List registered generators."""
    from gentx.core.use_cases.generate import list_generators

    generators = list_generators()

    if as_json:
        click.echo(json.dumps([g.to_dict() for g in generators], indent=2))
        return

    click.secho(f"\n🧩 Generators: {len(generators)}", fg="cyan", bold=True)
    for g in generators:
        click.echo(f"   • {g.name:<20} {g.description}")
    click.echo()


@generate.command()
@click.argument("name")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def check(ctx: click.Context, name: str, as_json: bool) -> None:
    """Show whether a generator's output is already installed."""
    from gentx.core.use_cases.generate import check_generator

    result = check_generator(name, config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    if result.report.installed:
        click.secho(f"\n✅ {name} is installed", fg="green", bold=True)
    else:
        click.secho(f"\n⊘ {name} is not installed", fg="yellow", bold=True)
    for probe in result.report.probes:
        mark = "✓" if probe.passed else "✗"
        click.echo(f"   {mark} {probe.probe}")
    click.echo()


@generate.command()
@click.argument("name")
@click.option("--dry-run", is_flag=True, help="Preview changes without writing.")
@click.option("--force", is_flag=True,
              help="Re-run even if installed and skip the clean-working-copy check.")
@click.option("--allow-dirty", is_flag=True,
              help="Skip only the clean-working-copy check.")
@click.option("--diff", "show_diff", is_flag=True, help="Show diffs for applied changes.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def run(
    ctx: click.Context,
    name: str,
    dry_run: bool,
    force: bool,
    allow_dirty: bool,
    show_diff: bool,
    as_json: bool,
) -> None:
    """Run a generator against the project.

    Examples:

        gentx generate run editorconfig

        gentx generate run dockerignore --dry-run

        gentx generate run dockerignore --force
    """
    from gentx.core.use_cases.generate import run_generator

    out = run_generator(
        name,
        config_path=ctx.obj.get("config_path"),
        dry_run=dry_run or None,
        force=force or None,
        allow_dirty=allow_dirty or None,
    )

    if as_json:
        click.echo(json.dumps(out.to_dict(), indent=2))
        sys.exit(0 if out.ok else 1)

    if out.result is None:
        click.secho(f"❌ {out.error or f'Generator {name!r} did not run'}", fg="red")
        sys.exit(1)

    render_result(out.result, show_diff=show_diff)

    if not out.ok:
        sys.exit(1)
