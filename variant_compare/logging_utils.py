"""Logging configuration helpers for Variant Compare."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

_LOGGER_NAME = "variant_compare"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _close_handlers(logger: logging.Logger) -> None:
    """Detach and close all handlers currently bound to the logger."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def configure_logging(*, log_file: Optional[Path] = None, verbose: bool = False) -> logging.Logger:
    """Configure the package logger and return it.

    With `log_file` the file is truncated so each run has an isolated log
    history; without it records go to stderr.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    _close_handlers(logger)

    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)
    logger.propagate = False
    handler: logging.Handler
    if log_file is not None:
        log_path = log_file.expanduser().resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, mode="w", encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    return logger


def get_logger() -> logging.Logger:
    """Return the package logger (configured or with null handler)."""
    logger = logging.getLogger(_LOGGER_NAME)
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return logger
