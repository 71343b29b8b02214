"""Snapshot extraction from host variable stores.

A host variable store is an ordered sequence of ``{key, value}`` entries. The
functions here flatten such a sequence into a read-only ``key -> value``
mapping. They never raise: absent or malformed input yields an empty snapshot.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any, Dict, Sequence

Snapshot = Mapping[str, Any]

EMPTY_SNAPSHOT: Snapshot = MappingProxyType({})

_MISSING = object()


def get_path(obj: Any, path: Sequence[str], default: Any = None) -> Any:
    """Walk ``path`` through nested mappings or attributes, returning ``default`` on a miss."""
    current = obj
    for part in path:
        if current is None:
            return default
        if isinstance(current, Mapping):
            current = current.get(part, _MISSING)
        else:
            current = getattr(current, part, _MISSING)
        if current is _MISSING:
            return default
    return current


def _is_hashable(key: Any) -> bool:
    try:
        hash(key)
    except TypeError:
        return False
    return True


def _entry_key_value(entry: Any) -> tuple[Any, Any] | None:
    if isinstance(entry, Mapping):
        if "key" not in entry:
            return None
        key, value = entry["key"], entry.get("value")
    elif hasattr(entry, "key"):
        key, value = entry.key, getattr(entry, "value", None)
    else:
        return None
    # list or dict keys cannot index a snapshot
    if not _is_hashable(key):
        return None
    return key, value


def extract(store: Any) -> Snapshot:
    """
    Convert a variable store into a Snapshot.

    Args:
        store: Sequence of ``{key, value}`` entries (mappings or objects with
            ``key``/``value`` attributes), or None

    Returns:
        Read-only mapping of key to value. Entries without a usable (hashable) key are skipped;
        when a key repeats the last entry wins.
    """
    if not store or isinstance(store, (str, bytes, Mapping)) or not isinstance(store, Iterable):
        return EMPTY_SNAPSHOT

    values: Dict[str, Any] = {}
    for entry in store:
        pair = _entry_key_value(entry)
        if pair is None:
            continue
        key, value = pair
        values[key] = value

    if not values:
        return EMPTY_SNAPSHOT
    return MappingProxyType(values)


def as_snapshot(value: Any) -> Snapshot:
    """Coerce diff input to a Snapshot; anything that is not a mapping becomes empty."""
    if isinstance(value, Mapping):
        return value
    return EMPTY_SNAPSHOT


__all__ = [
    "Snapshot",
    "EMPTY_SNAPSHOT",
    "get_path",
    "extract",
    "as_snapshot",
]
