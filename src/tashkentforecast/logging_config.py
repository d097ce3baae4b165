"""
Logging Configuration Module

All package loggers hang off the ``tashkentforecast`` logger. Console output
goes to stderr so that stdout stays free for command output (reports and
``--json`` documents).

Usage:
    from tashkentforecast.logging_config import setup_logging, get_logger

    setup_logging()  # Call once at application startup
    logger = get_logger(__name__)
    logger.info("Refresh started")
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

from tashkentforecast.config import get_config

PACKAGE_LOGGER = "tashkentforecast"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS = ("urllib3", "werkzeug")

_logging_configured = False


def _build_handlers(level: int, log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    force: bool = False,
) -> None:
    """Attach console (stderr) and optional file handlers to the package logger.

    Args:
        level: Log level name. Defaults to the configured level.
        log_file: Also write to this file. Defaults to the configured file.
        force: Replace handlers even if logging is already set up.
    """
    global _logging_configured

    if _logging_configured and not force:
        return

    logging_config = get_config().logging
    numeric_level = getattr(logging, (level or logging_config.level).upper(), logging.INFO)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(numeric_level)
    package_logger.handlers.clear()
    for handler in _build_handlers(numeric_level, log_file or logging_config.log_file):
        package_logger.addHandler(handler)
    package_logger.propagate = False

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _logging_configured = True


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, placed under the package namespace."""
    if not _logging_configured:
        setup_logging()

    if not name.startswith(PACKAGE_LOGGER):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def reset_logging() -> None:
    """Drop package handlers so the next setup starts clean (used by tests)."""
    global _logging_configured
    _logging_configured = False
    logging.getLogger(PACKAGE_LOGGER).handlers.clear()
