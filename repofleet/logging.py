"""Logging setup shared by the repofleet commands.

Diagnostics go to stderr so that stdout carries only the report. Worker
threads log per-repository failures as ``<slug>: <message>``; the optional
log file keeps those records with a timestamp and the worker thread name.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

ROOT_LOGGER = "repofleet"
CONSOLE_FORMAT = "[repofleet] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(threadName)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``repofleet.<name>`` (or the root repofleet logger)."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Attach the stderr handler and, when ``log_file`` is given, an appending file sink.

    Calling it again replaces (and closes) the handlers installed by a previous call.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        path = log_file.expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        sink = logging.FileHandler(path, mode="a", encoding="utf-8")
        sink.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(sink)

    return logger


__all__ = ["configure_logging", "get_logger"]
