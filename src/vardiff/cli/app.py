"""
vardiff CLI: report variable mutations across recorded test-run script events.

Commands:
- replay: Feed a recorded event stream through the diff reporter
- compare: Diff two globals/environment files directly
"""

from __future__ import annotations

from typing import Any, List, Optional

import typer
from rich.console import Console

from vardiff.cli.formatters import ConsolePresenter, JsonPresenter, build_diff_table
from vardiff.cli.load_helpers import load_or_exit
from vardiff.core.diff_engine import diff
from vardiff.core.snapshot import extract
from vardiff.io.loaders import load_event_stream, load_variable_store
from vardiff.reporter import DONE_EVENT, SCRIPT_EVENT, EventEmitter, ReporterOptions, attach
from vardiff.utils.logging import configure_logging

app = typer.Typer(help="vardiff: report global and environment variable changes across script events.")
console = Console()


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level for diagnostics on stderr"),
) -> None:
    """Report global and environment variable changes across script events."""
    try:
        configure_logging(log_level)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=2)


def _load_store(path: str | None, verbose_load: bool) -> Optional[List[dict[str, Any]]]:
    if path is None:
        return None
    return load_or_exit(load_variable_store, path, console=console, verbose_errors=verbose_load)


@app.command()
def replay(
    events: str = typer.Argument(..., help="Recorded script events file (JSON or YAML)"),
    globals_path: str | None = typer.Option(None, "--globals", "-g", help="Initial globals file"),
    environment_path: str | None = typer.Option(None, "--environment", "-e", help="Initial environment file"),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON objects instead of tables"),
    silent: bool = typer.Option(False, "--silent", help="Do not report anything"),
    verbose_load: bool = typer.Option(False, "--verbose-load", help="Display full validation trace on loader errors"),
) -> None:
    """Replay recorded script events and show variable changes per request."""
    stream = load_or_exit(load_event_stream, events, console=console, verbose_errors=verbose_load)
    initial_globals = _load_store(globals_path, verbose_load)
    initial_environment = _load_store(environment_path, verbose_load)

    presenter = JsonPresenter(console) if as_json else ConsolePresenter(console)
    emitter = EventEmitter()
    reporter = attach(
        emitter,
        ReporterOptions(silent=silent),
        presenter=presenter,
        initial_globals=initial_globals,
        initial_environment=initial_environment,
    )
    if reporter is None:
        return

    for recorded in stream.events:
        emitter.emit(SCRIPT_EVENT, recorded.error, recorded.payload())
    emitter.emit(DONE_EVENT, stream.error)


@app.command()
def compare(
    old: str = typer.Argument(..., help="Globals/environment file before the run"),
    new: str = typer.Argument(..., help="Globals/environment file after the run"),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of a table"),
    verbose_load: bool = typer.Option(False, "--verbose-load", help="Display full validation trace on loader errors"),
) -> None:
    """Diff two variable store files. Exits with code 1 when they differ."""
    old_entries = load_or_exit(load_variable_store, old, console=console, verbose_errors=verbose_load)
    new_entries = load_or_exit(load_variable_store, new, console=console, verbose_errors=verbose_load)

    result = diff(extract(old_entries), extract(new_entries))

    if as_json:
        console.print_json(data=result.to_dict(), default=str)
    elif result:
        console.print(build_diff_table(result, title="Changes"))
        console.print(
            f"[green]{len(result.added)} added[/green], "
            f"[red]{len(result.removed)} removed[/red], "
            f"[yellow]{len(result.modified)} modified[/yellow]"
        )
    else:
        console.print("[dim]No changes[/dim]")

    if result:
        raise typer.Exit(code=1)


__all__ = ["app"]
