"""
Session tracker for variable mutations across a run.

The tracker owns two rolling baselines (globals and local/environment) for the
lifetime of a single run. Every script event is diffed against the baselines,
after which the baselines are replaced by the event's snapshots, whether or
not anything changed.

Events must be delivered one at a time in arrival order; the tracker is not
shared between runs or threads.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from vardiff.core.diff_engine import diff
from vardiff.core.models import EventReport, RunSummary, ScriptEvent
from vardiff.core.snapshot import Snapshot, extract

logger = logging.getLogger(__name__)


class SessionTracker:
    """Tracks global and local variable baselines across one run."""

    def __init__(self, initial_globals: Any = None, initial_environment: Any = None):
        """
        Seed the baselines from the run's configured starting values.

        Args:
            initial_globals: ``{key, value}`` entries for the global store, or None
            initial_environment: ``{key, value}`` entries for the environment store, or None
        """
        self._global_baseline: Snapshot = extract(initial_globals)
        self._local_baseline: Snapshot = extract(initial_environment)
        self._last_request_name: Optional[str] = None
        self._events = 0
        self._changed_events = 0

    @property
    def global_baseline(self) -> Snapshot:
        return self._global_baseline

    @property
    def local_baseline(self) -> Snapshot:
        return self._local_baseline

    @property
    def events_processed(self) -> int:
        return self._events

    def on_event(self, event: Any, error: Any = None) -> EventReport:
        """
        Process one script event.

        Args:
            event: Host event (``{item, execution}`` structure) or a ScriptEvent
            error: Error the host reported with this event, passed through as-is

        Returns:
            EventReport with both diffs and the identifying context
        """
        script_event = ScriptEvent.from_raw(event)

        # Only the immediately previous event is compared, so A, B, A shows A twice.
        show_request_name = self._events == 0 or script_event.request_name != self._last_request_name
        self._last_request_name = script_event.request_name

        current_global = extract(script_event.globals_members)
        current_local = extract(script_event.environment_members)

        global_diff = diff(self._global_baseline, current_global)
        local_diff = diff(self._local_baseline, current_local)

        self._global_baseline = current_global
        self._local_baseline = current_local
        self._events += 1

        report = EventReport(
            sequence=self._events,
            request_name=script_event.request_name,
            target=script_event.target,
            global_diff=global_diff,
            local_diff=local_diff,
            show_request_name=show_request_name,
            error=error,
        )
        if report.has_changes:
            self._changed_events += 1

        logger.debug(
            "Event %d (%s/%s): %d global / %d local changes",
            report.sequence,
            report.request_name,
            report.target,
            len(global_diff),
            len(local_diff),
        )
        return report

    def on_done(self, error: Any = None) -> RunSummary:
        """Signal run completion; the host error is passed through untouched."""
        summary = RunSummary(events=self._events, changed_events=self._changed_events, error=error)
        logger.debug("Run completed: %d events, %d with changes", summary.events, summary.changed_events)
        return summary


__all__ = ["SessionTracker"]
