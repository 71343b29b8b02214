"""Formatting helpers and presenters for CLI output."""

from __future__ import annotations

import json
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from vardiff.core.models import ABSENT, DiffResult, EventReport, RunSummary

KIND_STYLES = {
    "added": "green",
    "removed": "red",
    "modified": "yellow",
}

ABSENT_MARKUP = "[dim]<absent>[/dim]"


def format_value(value: Any, style: Optional[str] = None) -> str:
    """Render a variable value as rich markup; ABSENT becomes a dim marker."""
    if value is ABSENT:
        return ABSENT_MARKUP
    text = escape(repr(value) if isinstance(value, str) else json.dumps(value, default=str))
    return f"[{style}]{text}[/{style}]" if style else text


def build_diff_table(result: DiffResult, title: str | None = None) -> Table:
    table = Table(title=title, show_header=True, header_style="bold blue")
    table.add_column("Variable", style="cyan")
    table.add_column("Before")
    table.add_column("After")
    table.add_column("Change", style="dim")
    for key, entry in result.items():
        style = KIND_STYLES[entry.kind]
        table.add_row(
            escape(str(key)),
            format_value(entry.old_value, "red" if entry.kind == "modified" else style),
            format_value(entry.new_value, style),
            f"[{style}]{entry.kind}[/{style}]",
        )
    return table


class ConsolePresenter:
    """Rich console rendering of per-event diffs."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def render_event(self, report: EventReport) -> None:
        if report.show_request_name:
            self.console.print(f"-> [bold]{escape(report.request_name or '<unnamed>')}[/bold]")
        self.console.print(f"  [dim underline]{escape(report.target or '<unknown>')}[/dim underline]")
        for kind, result in report.diffs():
            self.console.print(f"   ↳ [cyan]{kind.label}[/cyan]")
            self.console.print(build_diff_table(result))

    def render_done(self, summary: RunSummary) -> None:
        if summary.error is not None:
            self.console.print(f"[red]{escape(str(summary.error))}[/red]")
        self.console.print("[green]Run completed[/green]")


class JsonPresenter:
    """One JSON object per changed event, then the run summary."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def render_event(self, report: EventReport) -> None:
        self.console.print_json(data=report.to_dict(), default=str)

    def render_done(self, summary: RunSummary) -> None:
        self.console.print_json(data={"summary": summary.to_dict()}, default=str)


__all__ = [
    "format_value",
    "build_diff_table",
    "ConsolePresenter",
    "JsonPresenter",
]
