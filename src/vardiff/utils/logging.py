from __future__ import annotations
import logging
from functools import wraps
from typing import Any, Callable

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def log_calls(logger_name: str | None = None) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator to log function calls at DEBUG level with basic error logging."""

    def _decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        name = logger_name or func.__module__
        logger = logging.getLogger(name)

        @wraps(func)
        def _wrapper(*args: Any, **kwargs: Any) -> Any:
            logger.debug("Calling %s args=%s kwargs=%s", func.__name__, args, kwargs)
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error("Error in %s: %s", func.__name__, e)
                raise
            logger.debug("%s returned %s", func.__name__, type(result).__name__)
            return result

        return _wrapper

    return _decorator


def configure_logging(level: str | int = "WARNING") -> None:
    """Route vardiff log records to stderr at the given level."""
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("vardiff").setLevel(level)
