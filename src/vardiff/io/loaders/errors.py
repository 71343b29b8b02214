"""Errors raised while reading variable store and recorded event files."""

from __future__ import annotations

import os
from typing import Any, Dict, List

from pydantic import ValidationError

# Validation problems listed in a message before the rest are counted.
MAX_REPORTED_PROBLEMS = 3


def _display_path(path: str) -> str:
    try:
        return os.path.relpath(path)
    except ValueError:  # pragma: no cover - different drive on Windows
        return path


def _describe_problem(problem: Dict[str, Any]) -> str:
    where = ".".join(str(part) for part in problem.get("loc", ())) or "<root>"
    return f"{where}: {problem.get('msg') or problem.get('type') or 'validation error'}"


def summarize_validation(exc: ValidationError) -> str:
    """One line naming the first few invalid fields of a store or event file."""
    problems: List[Dict[str, Any]] = list(exc.errors())
    lines = [_describe_problem(problem) for problem in problems[:MAX_REPORTED_PROBLEMS]]
    hidden = len(problems) - len(lines)
    if hidden > 0:
        lines.append(f"... ({hidden} more)")
    return "; ".join(lines)


class LoaderError(RuntimeError):
    """A store or event file could not be read, parsed or validated."""

    def __init__(self, file_path: str, message: str, *, cause: Exception | None = None):
        self.file_path = file_path
        self.message = message
        self.cause = cause
        super().__init__(str(self))

    @property
    def detail(self) -> str | None:
        if self.cause is None:
            return None
        if isinstance(self.cause, ValidationError):
            return summarize_validation(self.cause)
        return str(self.cause)

    def __str__(self) -> str:
        text = f"{self.message} ({_display_path(self.file_path)})"
        detail = self.detail
        return f"{text}: {detail}" if detail else text


__all__ = ["LoaderError", "summarize_validation", "MAX_REPORTED_PROBLEMS"]
