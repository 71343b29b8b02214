"""
Tests for snapshot extraction.

Tests cover:
- extract on regular, empty and absent stores
- malformed entries and inputs
- immutability of the produced snapshot
"""

from types import SimpleNamespace

import pytest

from vardiff.core.snapshot import EMPTY_SNAPSHOT, as_snapshot, extract, get_path


class TestExtract:
    """Tests for extract()."""

    def test_extract_flattens_entries(self, entries):
        """Entries become a key -> value mapping."""
        snapshot = extract(entries({"a": "1", "b": 2}))

        assert dict(snapshot) == {"a": "1", "b": 2}

    @pytest.mark.parametrize("store", [None, [], (), "", {}, 42, "key=value"])
    def test_extract_absent_or_malformed_store_is_empty(self, store):
        """Absent, empty or non-sequence input yields an empty snapshot."""
        assert extract(store) == {}

    def test_extract_skips_entries_without_key(self):
        """Entries lacking a key are ignored instead of failing."""
        store = [{"value": "orphan"}, {"key": "a", "value": "1"}, "junk", None]

        assert dict(extract(store)) == {"a": "1"}

    def test_extract_skips_unhashable_keys(self):
        """Entries whose key is a list or dict are ignored instead of failing."""
        store = [{"key": ["a"], "value": 1}, {"key": {"x": 1}, "value": 2}, {"key": "b", "value": 3}]

        assert dict(extract(store)) == {"b": 3}

    def test_extract_last_duplicate_wins(self):
        """A repeated key keeps the value of its last entry."""
        store = [{"key": "a", "value": "first"}, {"key": "a", "value": "second"}]

        assert dict(extract(store)) == {"a": "second"}

    def test_extract_missing_value_is_none(self):
        """An entry with only a key maps to None."""
        assert dict(extract([{"key": "a"}])) == {"a": None}

    def test_extract_accepts_attribute_entries(self):
        """Objects exposing key/value attributes are supported."""
        store = [SimpleNamespace(key="token", value="abc")]

        assert dict(extract(store)) == {"token": "abc"}

    def test_extract_does_not_mutate_input(self, entries):
        """The input list is left untouched."""
        store = entries({"a": "1"})
        before = [dict(entry) for entry in store]

        extract(store)

        assert store == before

    def test_snapshot_is_read_only(self, entries):
        """Snapshots cannot be modified after creation."""
        snapshot = extract(entries({"a": "1"}))

        with pytest.raises(TypeError):
            snapshot["a"] = "2"  # type: ignore[index]

    def test_extract_builds_fresh_snapshot(self, entries):
        """Later changes to the source list do not leak into a snapshot."""
        store = entries({"a": "1"})
        snapshot = extract(store)
        store.append({"key": "b", "value": "2"})

        assert "b" not in snapshot


class TestHelpers:
    """Tests for get_path() and as_snapshot()."""

    def test_get_path_mapping_and_attributes(self):
        """get_path walks both mappings and attributes."""
        data = {"execution": SimpleNamespace(target="prerequest")}

        assert get_path(data, ("execution", "target")) == "prerequest"

    def test_get_path_missing_returns_default(self):
        """Missing segments return the default."""
        assert get_path({"item": None}, ("item", "name")) is None
        assert get_path({}, ("a", "b"), default="x") == "x"

    def test_as_snapshot_degrades_non_mapping(self):
        """Non-mapping input becomes the empty snapshot."""
        assert as_snapshot(["a"]) is EMPTY_SNAPSHOT
        assert as_snapshot(None) is EMPTY_SNAPSHOT
        assert as_snapshot({"a": 1}) == {"a": 1}
