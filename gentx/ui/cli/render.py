"""
Result rendering — turn an ExecutionResult into terminal output.

Stateless: every function takes a result and echoes it. The engine
itself never prints; this is the only place that does.
"""

from __future__ import annotations

import click

from gentx.core.models.change import ChangeKind
from gentx.core.models.result import ChangeStatus, ChangeSummary, ExecutionResult, Outcome

_KIND_MARKERS = {
    ChangeKind.CREATE: ("+", "green"),
    ChangeKind.MODIFY: ("~", "yellow"),
    ChangeKind.DELETE: ("-", "red"),
}

_STATUS_SUFFIX = {
    ChangeStatus.FAILED: " ✗ failed",
    ChangeStatus.NOT_ATTEMPTED: " ⊘ not attempted",
}

_OUTCOME_HEADERS = {
    Outcome.APPLIED: ("✅", "green", "Applied"),
    Outcome.SKIPPED: ("⊘", "yellow", "Skipped"),
    Outcome.PREVIEWED: ("📋", "cyan", "Dry run"),
    Outcome.ABORTED: ("❌", "red", "Aborted"),
}


def render_change(change: ChangeSummary, show_diff: bool = False) -> None:
    """Echo one change line, optionally followed by its diff."""
    marker, color = _KIND_MARKERS[change.kind]
    click.secho(f"   {marker} {change.path}", fg=color, nl=False)

    stats = ""
    if change.kind is not ChangeKind.DELETE:
        stats = f"  (+{change.lines_added}/-{change.lines_removed})"
    click.echo(f"{stats}{_STATUS_SUFFIX.get(change.status, '')}")

    if show_diff and change.diff:
        for line in change.diff.splitlines():
            click.echo(f"     │ {line}")


def render_result(result: ExecutionResult, show_diff: bool = False) -> None:
    """Echo a full run report."""
    icon, color, label = _OUTCOME_HEADERS[result.outcome]
    click.secho(f"\n{icon} {label}: {result.generator}", fg=color, bold=True)
    if result.message:
        click.echo(f"   {result.message}")

    if result.gate is not None and not result.gate.clean:
        click.echo()
        click.secho("   Working copy:", fg="white", bold=True)
        for line in result.gate.details[:20]:
            click.echo(f"     {line}")

    if result.probes and result.outcome is Outcome.SKIPPED:
        click.echo()
        click.secho("   Probes:", fg="white", bold=True)
        for probe in result.probes:
            mark = "✓" if probe.passed else "✗"
            click.echo(f"     {mark} {probe.probe}")

    if result.changes:
        click.echo()
        click.secho(f"   Changes: {len(result.changes)}", fg="white", bold=True)
        for change in result.changes:
            render_change(change, show_diff=show_diff or result.outcome is Outcome.PREVIEWED)
    elif result.outcome in (Outcome.APPLIED, Outcome.PREVIEWED):
        click.echo("   No changes.")

    if result.errors:
        click.echo()
        for err in result.errors:
            where = f" [{err.path}]" if err.path else ""
            click.secho(f"   {err.code}{where}: {err.message}", fg="red")

    click.echo()
