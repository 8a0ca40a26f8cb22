from __future__ import annotations

import logging
import sys

"""Logging initialization with labeled prefixes.

Every line written by the tool starts with a label (INFO|WARN|ERROR|SUMMARY),
which keeps CLI output greppable. Standard logging only.

Library modules (resolver, services) log through logging.getLogger(__name__)
and stay silent unless the application logger is configured with DEBUG.
"""

__all__ = [
    "LOGGER_NAME",
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "setup_logging",
    "get_logger",
    "log_summary",
    "set_debug",
    "reset_logging",
]

LOGGER_NAME = "sheet_binder"

# Custom SUMMARY level (between INFO=20 and WARNING=30)
SUMMARY_LEVEL = 25

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """Formatter producing ``LABEL message`` lines."""

    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
        SUMMARY_LEVEL: "SUMMARY",
    }

    def format(self, record: logging.LogRecord) -> str:
        level_label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        return f"{level_label} {record.getMessage()}"


def setup_logging() -> logging.Logger:
    """Configure the application logger (idempotent).

    The handler is attached to the ``sheet_binder`` logger and to the ``src``
    package logger so module loggers share the labeled stdout output.

    Returns:
        Configured logger instance for the application
    """
    global _logger

    if _logger is not None:
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.INFO)
    handler.setFormatter(LabeledFormatter())

    for name in (LOGGER_NAME, "src"):
        lg = logging.getLogger(name)
        lg.setLevel(logging.INFO)
        for h in lg.handlers[:]:
            lg.removeHandler(h)
        lg.addHandler(handler)
        # Prevent propagation to root logger to avoid duplicate output
        lg.propagate = False

    _logger = logging.getLogger(LOGGER_NAME)
    return _logger


def get_logger() -> logging.Logger:
    if _logger is None:
        return setup_logging()
    return _logger


def set_debug() -> None:
    """Lower the application and library loggers (and their handler) to DEBUG."""
    logger = get_logger()
    for name in (LOGGER_NAME, "src"):
        lg = logging.getLogger(name)
        lg.setLevel(logging.DEBUG)
        for h in lg.handlers:
            h.setLevel(logging.DEBUG)
    logger.debug("debug mode enabled")


def log_summary(message: str) -> None:
    """Log a message at SUMMARY level."""
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Reset the global logger state. Mainly for testing purposes."""
    global _logger
    _logger = None
