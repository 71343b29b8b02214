import json
import textwrap

import pytest

from vardiff.io.loaders import LoaderError, load_event_stream, load_variable_store
from vardiff.io.loaders.errors import MAX_REPORTED_PROBLEMS


def test_load_postman_environment_export(tmp_path):
    path = tmp_path / "env.json"
    path.write_text(
        json.dumps(
            {
                "name": "staging",
                "values": [
                    {"key": "base_url", "value": "https://staging", "enabled": True},
                    {"key": "token", "value": "abc", "type": "secret"},
                    {"key": "legacy", "value": "x", "enabled": False},
                ],
            }
        ),
        encoding="utf-8",
    )

    assert load_variable_store(str(path)) == [
        {"key": "base_url", "value": "https://staging"},
        {"key": "token", "value": "abc"},
    ]


def test_load_variable_scope_dump(tmp_path):
    path = tmp_path / "globals.json"
    path.write_text(json.dumps({"values": {"members": [{"key": "a", "value": 1}]}}), encoding="utf-8")

    assert load_variable_store(str(path)) == [{"key": "a", "value": 1}]


def test_load_yaml_entry_list(tmp_path):
    path = tmp_path / "globals.yaml"
    path.write_text(
        textwrap.dedent(
            """
            - key: a
              value: "1"
            - key: b
            """
        ),
        encoding="utf-8",
    )

    assert load_variable_store(str(path)) == [{"key": "a", "value": "1"}, {"key": "b", "value": None}]


def test_load_empty_store_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert load_variable_store(str(path)) == []


def test_missing_store_file(tmp_path):
    with pytest.raises(LoaderError) as exc_info:
        load_variable_store(str(tmp_path / "nope.json"))

    assert "File not found" in str(exc_info.value)


def test_directory_path_wrapped(tmp_path):
    with pytest.raises(LoaderError) as exc_info:
        load_variable_store(str(tmp_path))

    assert "Could not read file" in str(exc_info.value)
    assert isinstance(exc_info.value.cause, OSError)


def test_invalid_json_store(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(LoaderError) as exc_info:
        load_variable_store(str(path))

    assert "Could not parse file" in str(exc_info.value)
    assert exc_info.value.cause is not None


def test_store_entry_without_key_rejected(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("values:\n  - value: orphan\n", encoding="utf-8")

    with pytest.raises(LoaderError) as exc_info:
        load_variable_store(str(path))

    message = str(exc_info.value)
    assert "Invalid variable store" in message
    assert "values.0.key" in message


def test_validation_errors_truncated(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([{"value": i} for i in range(5)]), encoding="utf-8")

    with pytest.raises(LoaderError) as exc_info:
        load_variable_store(str(path))

    assert "... (2 more)" in str(exc_info.value)
    assert str(exc_info.value).count("Field required") == MAX_REPORTED_PROBLEMS


def test_load_event_stream_list(tmp_path):
    path = tmp_path / "events.yaml"
    path.write_text(
        textwrap.dedent(
            """
            - item: {name: Login}
              execution:
                target: test
                globals:
                  values:
                    members:
                      - {key: token, value: abc}
              error: assertion failed
            - item: {name: Profile}
            """
        ),
        encoding="utf-8",
    )

    stream = load_event_stream(str(path))

    assert len(stream.events) == 2
    assert stream.events[0].error == "assertion failed"
    assert stream.events[0].payload()["item"] == {"name": "Login"}
    assert stream.events[1].execution == {}
    assert stream.error is None


def test_load_event_stream_mapping_with_run_error(tmp_path):
    path = tmp_path / "events.json"
    path.write_text(json.dumps({"events": [], "error": "run aborted"}), encoding="utf-8")

    stream = load_event_stream(str(path))

    assert stream.events == []
    assert stream.error == "run aborted"


def test_invalid_event_stream(tmp_path):
    path = tmp_path / "events.json"
    path.write_text(json.dumps(["not an event"]), encoding="utf-8")

    with pytest.raises(LoaderError) as exc_info:
        load_event_stream(str(path))

    assert "Invalid event stream" in str(exc_info.value)
