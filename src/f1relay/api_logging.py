"""Logging setup and upstream call logging for the relay."""

from __future__ import annotations

import functools
import logging
import os
import time
from typing import Any, Awaitable, Callable, TypeVar

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])

API_LOGGER_NAME = "f1relay.api"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"

api_logger = logging.getLogger(API_LOGGER_NAME)


def configure_logging(level: str = "INFO", api_log_file: str | None = None) -> None:
    """Configure root logging and, optionally, a dedicated API call log file."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    if not api_log_file:
        return

    log_dir = os.path.dirname(api_log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    target = os.path.abspath(api_log_file)
    for handler in api_logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == target:
            return

    handler = logging.FileHandler(api_log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    api_logger.addHandler(handler)
    api_logger.setLevel(logging.DEBUG)


def _summarize_args(args: tuple[Any, ...], kwargs: dict[str, Any]) -> str:
    # args[0] is the client instance
    parts = [repr(a) for a in args[1:]]
    parts += [f"{k}={v!r}" for k, v in kwargs.items()]
    return ", ".join(parts)


def _count(result: Any) -> int:
    if isinstance(result, tuple):
        return sum(_count(part) for part in result)
    if isinstance(result, list):
        return len(result)
    return 1


def log_api_call(fn: F) -> F:
    """Decorator that logs async upstream client calls to the API logger."""

    @functools.wraps(fn)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        arg_str = _summarize_args(args, kwargs)
        api_logger.debug("CALL: %s(%s)", fn.__qualname__, arg_str)

        start = time.monotonic()
        try:
            result = await fn(*args, **kwargs)
        except Exception as exc:
            elapsed = time.monotonic() - start
            api_logger.error(
                "FAIL: %s(%s) -> %s: %s (%.3fs)",
                fn.__qualname__, arg_str, type(exc).__name__, exc, elapsed,
            )
            raise
        elapsed = time.monotonic() - start
        api_logger.info(
            "OK: %s(%s) -> %d items (%.3fs)",
            fn.__qualname__, arg_str, _count(result), elapsed,
        )
        return result

    return wrapper  # type: ignore[return-value]
