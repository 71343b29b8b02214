"""
Core snapshot diffing and session tracking.

Components:
- extract: Flatten a ``{key, value}`` store into a read-only snapshot
- diff: Classify changes between two snapshots
- SessionTracker: Hold rolling baselines and diff each script event

Example:
    from vardiff.core import SessionTracker

    tracker = SessionTracker(initial_globals=[{"key": "a", "value": "1"}])
    report = tracker.on_event(event)
    for kind, result in report.diffs():
        ...
"""

from vardiff.core.diff_engine import diff, values_equal
from vardiff.core.models import (
    ABSENT,
    DiffEntry,
    DiffResult,
    EventReport,
    RunSummary,
    ScriptEvent,
    StoreKind,
)
from vardiff.core.session_tracker import SessionTracker
from vardiff.core.snapshot import EMPTY_SNAPSHOT, Snapshot, extract

__all__ = [
    "ABSENT",
    "DiffEntry",
    "DiffResult",
    "EventReport",
    "RunSummary",
    "ScriptEvent",
    "StoreKind",
    "SessionTracker",
    "Snapshot",
    "EMPTY_SNAPSHOT",
    "diff",
    "values_equal",
    "extract",
]
