"""Reporter: binds a SessionTracker and a presenter to a host run emitter.

The host is anything exposing ``on(event_name, callback)``. Two events are used:

- ``script``: ``callback(error, args)`` where ``args`` carries ``item`` and
  ``execution`` (see ScriptEvent)
- ``done``: ``callback(error, summary=None)`` once the run completes
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol

from pydantic import BaseModel, ConfigDict

from vardiff.core.models import EventReport, RunSummary
from vardiff.core.session_tracker import SessionTracker

logger = logging.getLogger(__name__)

SCRIPT_EVENT = "script"
DONE_EVENT = "done"


class Presenter(Protocol):
    def render_event(self, report: EventReport) -> None: ...

    def render_done(self, summary: RunSummary) -> None: ...


class Emitter(Protocol):
    def on(self, event_name: str, callback: Callable[..., Any]) -> Any: ...


class ReporterOptions(BaseModel):
    """Options accepted both as run options and as reporter-specific options."""

    model_config = ConfigDict(extra="ignore")

    silent: bool = False


class EventEmitter:
    """Minimal synchronous emitter; listeners run in registration order."""

    def __init__(self) -> None:
        self._listeners: Dict[str, List[Callable[..., Any]]] = defaultdict(list)

    def on(self, event_name: str, callback: Callable[..., Any]) -> "EventEmitter":
        self._listeners[event_name].append(callback)
        return self

    def emit(self, event_name: str, *args: Any) -> int:
        listeners = list(self._listeners.get(event_name, ()))
        for listener in listeners:
            listener(*args)
        return len(listeners)


class DiffReporter:
    """Feeds host events into a SessionTracker and hands changes to a presenter."""

    def __init__(self, tracker: SessionTracker, presenter: Presenter):
        self.tracker = tracker
        self.presenter = presenter
        self.summary: Optional[RunSummary] = None

    def handle_script(self, error: Any, args: Any) -> EventReport:
        report = self.tracker.on_event(args, error=error)
        if report.has_changes:
            self.presenter.render_event(report)
        return report

    def handle_done(self, error: Any = None, *_: Any) -> RunSummary:
        self.summary = self.tracker.on_done(error)
        if error is not None:
            logger.warning("Run finished with error: %s", error)
        self.presenter.render_done(self.summary)
        return self.summary


def _coerce_options(options: Any) -> ReporterOptions:
    if options is None:
        return ReporterOptions()
    if isinstance(options, ReporterOptions):
        return options
    if isinstance(options, Mapping):
        return ReporterOptions.model_validate(options)
    return ReporterOptions(silent=bool(getattr(options, "silent", False)))


def attach(
    emitter: Emitter,
    options: Any = None,
    reporter_options: Any = None,
    *,
    presenter: Optional[Presenter] = None,
    initial_globals: Any = None,
    initial_environment: Any = None,
) -> Optional[DiffReporter]:
    """
    Subscribe a DiffReporter to ``emitter``.

    Args:
        emitter: Host run emitter exposing ``on(event_name, callback)``
        options: Run options (mapping, ReporterOptions, or object with ``silent``)
        reporter_options: Reporter-specific options, same accepted forms
        presenter: Renderer for changes; defaults to a rich ConsolePresenter
        initial_globals: Configured global ``{key, value}`` entries for the run
        initial_environment: Configured environment ``{key, value}`` entries

    Returns:
        The attached reporter, or None when either options set is silent
    """
    if _coerce_options(options).silent or _coerce_options(reporter_options).silent:
        logger.debug("Silent run, variable diff reporter not attached")
        return None

    if presenter is None:
        from vardiff.cli.formatters import ConsolePresenter

        presenter = ConsolePresenter()

    reporter = DiffReporter(SessionTracker(initial_globals, initial_environment), presenter)
    emitter.on(SCRIPT_EVENT, reporter.handle_script)
    emitter.on(DONE_EVENT, reporter.handle_done)
    return reporter


__all__ = [
    "SCRIPT_EVENT",
    "DONE_EVENT",
    "Presenter",
    "Emitter",
    "ReporterOptions",
    "EventEmitter",
    "DiffReporter",
    "attach",
]
