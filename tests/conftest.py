"""
Shared fixtures for variable diff tests.
"""

from typing import Any, Dict, Optional

import pytest


def _members(values: Optional[Dict[str, Any]]) -> list:
    return [{"key": key, "value": value} for key, value in (values or {}).items()]


def build_event(
    name: Optional[str],
    target: str = "test",
    globals_: Optional[Dict[str, Any]] = None,
    environment: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Build a host script event with the given store contents."""
    return {
        "item": {"name": name},
        "execution": {
            "target": target,
            "globals": {"values": {"members": _members(globals_)}},
            "environment": {"values": {"members": _members(environment)}},
        },
    }


@pytest.fixture
def make_event():
    return build_event


@pytest.fixture
def entries():
    """Convert a plain dict to ``{key, value}`` store entries."""
    return _members
