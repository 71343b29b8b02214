"""Shared helpers for loading store and event files with CLI-friendly errors."""

from __future__ import annotations

from typing import Any, Callable, TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from vardiff.io.loaders import LoaderError

T = TypeVar("T")


def load_or_exit(
    loader_fn: Callable[..., T],
    *args: Any,
    console: Console,
    verbose_errors: bool = False,
    **kwargs: Any,
) -> T:
    try:
        return loader_fn(*args, **kwargs)
    except LoaderError as err:
        if verbose_errors and err.cause:
            detail = f"{err.message} ({err.file_path})\n{err.cause}"
            console.print(f"[red]Failed to load data:[/red] {escape(detail)}")
        else:
            console.print(f"[red]Failed to load data:[/red] {escape(str(err))}")
        raise typer.Exit(code=1)


__all__ = ["load_or_exit"]
