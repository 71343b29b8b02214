from __future__ import annotations

import json
import os
from typing import Any, Dict, List

import yaml
from pydantic import ValidationError

from vardiff.io.loaders.errors import LoaderError
from vardiff.io.loaders.file_spec import EventStreamFileSpec, VariableStoreFileSpec
from vardiff.utils.logging import log_calls

JSON_SUFFIXES = (".json",)
YAML_SUFFIXES = (".yaml", ".yml")


def _read_data_file(path: str) -> Any:
    if not os.path.exists(path):
        raise LoaderError(path, "File not found")
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.lower().endswith(JSON_SUFFIXES):
                return json.load(f)
            return yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as exc:
        raise LoaderError(path, "Could not parse file", cause=exc) from exc
    except OSError as exc:
        raise LoaderError(path, "Could not read file", cause=exc) from exc


@log_calls()
def load_variable_store(path: str) -> List[Dict[str, Any]]:
    """Load a globals/environment file and return its enabled ``{key, value}`` entries.

    JSON files are read with ``json``; ``.yaml``/``.yml`` (and anything else) with
    PyYAML. An empty file yields an empty store.
    """
    data = _read_data_file(path)
    if data is None:
        return []
    try:
        spec = VariableStoreFileSpec.model_validate(data)
    except ValidationError as exc:
        raise LoaderError(path, "Invalid variable store", cause=exc) from exc
    return spec.entries()


@log_calls()
def load_event_stream(path: str) -> EventStreamFileSpec:
    """Load recorded script events in delivery order."""
    data = _read_data_file(path)
    if data is None:
        return EventStreamFileSpec()
    try:
        return EventStreamFileSpec.model_validate(data)
    except ValidationError as exc:
        raise LoaderError(path, "Invalid event stream", cause=exc) from exc
