# argsmith — (c) 2025 rtj.dev LLC — MIT Licensed
"""utils.py

Helpers shared by the command tree: sync-to-async wrapping of command actions
and opt-in log output for the `argsmith` package logger.
"""
from __future__ import annotations

import functools
import inspect
import logging
import os
from typing import Any, Awaitable, Callable, TypeVar

import pythonjsonlogger.json
from rich.logging import RichHandler

from argsmith.logger import logger

T = TypeVar("T")

_JSON_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

# Handlers attached by the last setup_logging() call.
_installed_handlers: list[logging.Handler] = []


def is_coroutine(function: Callable[..., Any]) -> bool:
    return inspect.iscoroutinefunction(function)


def ensure_async(function: Callable[..., T]) -> Callable[..., Awaitable[T]]:
    """Return `function` unchanged if it is async, otherwise an async wrapper."""
    if not callable(function):
        raise TypeError(f"{function} is not callable")
    if is_coroutine(function):
        return function  # type: ignore

    @functools.wraps(function)
    async def run_sync(*args, **kwargs) -> T:
        return function(*args, **kwargs)

    return run_sync


def running_in_container() -> bool:
    try:
        with open("/proc/1/cgroup", "r", encoding="UTF-8") as cgroup:
            content = cgroup.read()
    except OSError:
        return False
    return any(
        marker in content for marker in ("docker", "kubepods", "containerd", "podman")
    )


def _console_handler(mode: str) -> logging.Handler:
    if mode == "cli":
        return RichHandler(
            rich_tracebacks=True,
            show_path=False,
            markup=False,
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
    if mode == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(pythonjsonlogger.json.JsonFormatter(_JSON_FORMAT))
        return handler
    raise ValueError(f"Invalid log mode: {mode}")


def _file_handler(log_filename: str, as_json: bool) -> logging.Handler:
    handler = logging.FileHandler(log_filename, "a", "UTF-8")
    if as_json:
        handler.setFormatter(pythonjsonlogger.json.JsonFormatter(_JSON_FORMAT))
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(name)s] [%(levelname)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    return handler


def setup_logging(
    mode: str | None = None,
    log_filename: str | None = None,
    json_log_to_file: bool = False,
    file_log_level: int = logging.DEBUG,
    console_log_level: int = logging.WARNING,
) -> logging.Logger:
    """
    Send argsmith's own log records (registration, dispatch, command timing)
    to the console and, optionally, a file.

    Only the `argsmith` logger is configured. Handlers the application has
    installed on the root logger, or on `argsmith` itself, are left in place.
    While these handlers are installed, argsmith records stop propagating to
    the root logger so they are not printed twice. Calling this again replaces
    the handlers installed by the previous call.

    Args:
        mode (str | None): "cli" for Rich console output or "json" for JSON
            lines on stderr. Defaults to `ARGSMITH_LOG_MODE`, then to "json"
            inside a container and "cli" elsewhere.
        log_filename (str | None): Also append records to this file.
        json_log_to_file (bool): Format file records as JSON.
        file_log_level (int): Threshold for the file handler.
        console_log_level (int): Threshold for the console handler.

    Returns:
        logging.Logger: The configured `argsmith` logger.

    Raises:
        ValueError: If `mode` is not "cli" or "json".
    """
    if not mode:
        mode = os.getenv("ARGSMITH_LOG_MODE") or (
            "json" if running_in_container() else "cli"
        )
    console_handler = _console_handler(mode)
    console_handler.setLevel(console_log_level)
    handlers = [console_handler]
    if log_filename:
        file_handler = _file_handler(log_filename, json_log_to_file)
        file_handler.setLevel(file_log_level)
        handlers.append(file_handler)

    for handler in _installed_handlers:
        logger.removeHandler(handler)
        handler.close()
    _installed_handlers[:] = handlers

    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(min(handler.level for handler in handlers))
    logger.propagate = False
    logger.debug("Logging initialized in '%s' mode.", mode)
    return logger
