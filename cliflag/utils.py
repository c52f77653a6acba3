# Cliflag — (c) 2025 rtj.dev LLC — MIT Licensed
"""utils.py"""
from __future__ import annotations

import logging
import os

import pythonjsonlogger.json
from rich.logging import RichHandler

from cliflag.console import error_console

JSON_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
LOG_MODES = ("cli", "json")


def split_assignment(text: str) -> tuple[str, str]:
    """Split `NAME=VALUE` into its parts. The value may itself contain '='."""
    name, separator, value = text.partition("=")
    if not separator or not name:
        raise ValueError(f"Expected NAME=VALUE, got '{text}'")
    return name, value


def _console_handler(mode: str) -> logging.Handler:
    if mode == "cli":
        return RichHandler(
            console=error_console,
            show_time=False,
            show_path=False,
            markup=False,
        )
    if mode == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(pythonjsonlogger.json.JsonFormatter(JSON_LOG_FORMAT))
        return handler
    raise ValueError(f"Invalid log mode: {mode}. Must be one of: {', '.join(LOG_MODES)}")


def setup_logging(mode: str | None = None, level: int = logging.WARNING) -> None:
    """
    Route cliflag's log records to stderr.

    Args:
        mode (str | None): "cli" for Rich console output or "json" for one JSON
            object per record. Falls back to `CLIFLAG_LOG_MODE`, then "cli".
        level (int): Lowest level that reaches the console.

    Raises:
        ValueError: If `mode` is not a known log mode.
    """
    mode = mode or os.getenv("CLIFLAG_LOG_MODE") or "cli"
    handler = _console_handler(mode)
    handler.setLevel(level)

    logger = logging.getLogger("cliflag")
    for old_handler in list(logger.handlers):
        logger.removeHandler(old_handler)
        old_handler.close()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    logger.debug("Logging initialized in '%s' mode.", mode)
