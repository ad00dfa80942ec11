"""
gentx — CLI entrypoint.

Usage:
    python -m gentx.main --help
    gentx generate list
    gentx generate run editorconfig --dry-run
"""

from __future__ import annotations

from pathlib import Path

import click

from gentx import __version__
from gentx.core.observability.logging_config import configure


@click.group()
@click.version_option(version=__version__, prog_name="gentx")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to gentx.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """gentx — stage, preview, and apply generated project files."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    configure(debug=debug, verbose=verbose, quiet=quiet)


from gentx.ui.cli.audit import audit  # noqa: E402
from gentx.ui.cli.generate import generate  # noqa: E402

cli.add_command(generate)
cli.add_command(audit)


if __name__ == "__main__":
    cli()
