"""
Variable diff data models.

These models describe what flows through the diff tracker:
- StoreKind: Which variable store a diff belongs to (globals or local)
- DiffEntry: A single added/removed/modified variable
- DiffResult: All entries for one store kind for one event
- ScriptEvent: The host's script event, reduced to the fields we read
- EventReport: Result of processing one script event
- RunSummary: Completion signal for a whole run

Absent values are marked with the ``ABSENT`` sentinel, so a variable whose
value is ``None`` is still distinguishable from a variable that does not exist.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, GetCoreSchemaHandler
from pydantic_core import core_schema

from vardiff.core.snapshot import get_path

ChangeKind = Literal["added", "removed", "modified"]


class _Absent:
    """Marker for the missing side of an added or removed variable."""

    _instance: Optional["_Absent"] = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<absent>"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT = _Absent()


class StoreKind(str, Enum):
    """Variable store a diff was computed for."""

    GLOBALS = "globals"
    LOCAL = "local"

    @property
    def label(self) -> str:
        return self.name


@dataclass(frozen=True)
class DiffEntry:
    """One changed variable: exactly one side is ABSENT, or both differ."""

    key: str
    old_value: Any = ABSENT
    new_value: Any = ABSENT

    @property
    def kind(self) -> ChangeKind:
        if self.old_value is ABSENT:
            return "added"
        if self.new_value is ABSENT:
            return "removed"
        return "modified"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"kind": self.kind}
        if self.old_value is not ABSENT:
            data["old"] = self.old_value
        if self.new_value is not ABSENT:
            data["new"] = self.new_value
        return data


class DiffResult(Mapping):
    """Read-only mapping of variable name to DiffEntry, ordered by name."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[DiffEntry] = ()):
        ordered = sorted(entries, key=lambda entry: str(entry.key))
        self._entries: Dict[str, DiffEntry] = {entry.key: entry for entry in ordered}

    def __getitem__(self, key: str) -> DiffEntry:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"DiffResult({list(self._entries.values())!r})"

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        return core_schema.is_instance_schema(cls)

    def of_kind(self, kind: ChangeKind) -> List[DiffEntry]:
        return [entry for entry in self._entries.values() if entry.kind == kind]

    @property
    def added(self) -> List[DiffEntry]:
        return self.of_kind("added")

    @property
    def removed(self) -> List[DiffEntry]:
        return self.of_kind("removed")

    @property
    def modified(self) -> List[DiffEntry]:
        return self.of_kind("modified")

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {key: entry.to_dict() for key, entry in self._entries.items()}


class ScriptEvent(BaseModel):
    """
    A host script event reduced to the fields the tracker reads.

    ``globals_members`` and ``environment_members`` hold the raw
    ``{key, value}`` entry sequences exactly as the host delivered them;
    snapshot extraction happens in the tracker.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    request_name: Optional[str] = None
    target: Optional[str] = None
    globals_members: Any = None
    environment_members: Any = None

    @classmethod
    def from_raw(cls, raw: Any) -> "ScriptEvent":
        """Build from the host's ``{item, execution}`` structure; missing parts become None."""
        if isinstance(raw, ScriptEvent):
            return raw
        name = get_path(raw, ("item", "name"))
        target = get_path(raw, ("execution", "target"))
        return cls(
            request_name=name if isinstance(name, str) else None,
            target=target if isinstance(target, str) else None,
            globals_members=get_path(raw, ("execution", "globals", "values", "members")),
            environment_members=get_path(raw, ("execution", "environment", "values", "members")),
        )


class EventReport(BaseModel):
    """Diffs and identifying context produced for one script event."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    sequence: int
    request_name: Optional[str] = None
    target: Optional[str] = None
    global_diff: DiffResult
    local_diff: DiffResult
    show_request_name: bool = True
    error: Any = None

    @property
    def has_changes(self) -> bool:
        return bool(self.global_diff) or bool(self.local_diff)

    def diffs(self) -> List[Tuple[StoreKind, DiffResult]]:
        """Non-empty diffs paired with their store kind, globals first."""
        pairs = [(StoreKind.GLOBALS, self.global_diff), (StoreKind.LOCAL, self.local_diff)]
        return [(kind, result) for kind, result in pairs if result]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sequence": self.sequence,
            "request": self.request_name,
            "target": self.target,
            StoreKind.GLOBALS.value: self.global_diff.to_dict(),
            StoreKind.LOCAL.value: self.local_diff.to_dict(),
        }


class RunSummary(BaseModel):
    """Completion signal for a run; ``error`` is the host error, passed through untouched."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    events: int = 0
    changed_events: int = 0
    error: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "events": self.events,
            "changed_events": self.changed_events,
            "error": None if self.error is None else str(self.error),
        }


__all__ = [
    "ABSENT",
    "ChangeKind",
    "StoreKind",
    "DiffEntry",
    "DiffResult",
    "ScriptEvent",
    "EventReport",
    "RunSummary",
]
