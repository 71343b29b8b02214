"""Snapshot diff engine.

Compares two flat snapshots and classifies every differing key as added,
removed, or modified. Values are compared as opaque scalars with strict
type-and-value equality, so ``"1"`` and ``1`` are different values. Ints and
floats count as one number type (``1 == 1.0``); booleans are never numbers.
"""

from __future__ import annotations

from typing import Any, List

from vardiff.core.models import ABSENT, DiffEntry, DiffResult
from vardiff.core.snapshot import Snapshot, as_snapshot


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def values_equal(left: Any, right: Any) -> bool:
    """Strict equality: both type and value must match. Ints and floats share one number type."""
    if _is_number(left) and _is_number(right):
        return left == right
    return type(left) is type(right) and left == right


def diff(old: Snapshot, new: Snapshot) -> DiffResult:
    """
    Diff two snapshots.

    Args:
        old: Previous snapshot (a non-mapping is treated as empty)
        new: Current snapshot (a non-mapping is treated as empty)

    Returns:
        DiffResult covering the keys present in exactly one snapshot plus
        the shared keys whose values differ. Unchanged keys never appear.
    """
    old = as_snapshot(old)
    new = as_snapshot(new)

    old_keys = set(old.keys())
    new_keys = set(new.keys())
    entries: List[DiffEntry] = []

    for key in old_keys ^ new_keys:
        if key in old_keys:
            entries.append(DiffEntry(key, old[key], ABSENT))
        else:
            entries.append(DiffEntry(key, ABSENT, new[key]))

    for key in old_keys & new_keys:
        if not values_equal(old[key], new[key]):
            entries.append(DiffEntry(key, old[key], new[key]))

    return DiffResult(entries)


__all__ = ["diff", "values_equal"]
