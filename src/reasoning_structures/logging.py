"""Logging configuration for reasoning-structures.

This module sets up the ``reasoning_structures`` package logger with console
and optional file handlers. Engine modules emit structured events through
structlog; ``setup_logging`` routes those events into the same stdlib logger
hierarchy so one level and one set of handlers govern everything.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from reasoning_structures.config import Settings


# Package logger
logger = logging.getLogger("reasoning_structures")


def _configure_structlog() -> None:
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(key_order=["event"], sort_keys=True),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def setup_logging(
    settings: Settings | None = None,
    *,
    log_level: str | None = None,
    log_format: str | None = None,
    log_file: Path | None = None,
) -> logging.Logger:
    """Set up logging for reasoning-structures.

    Args:
        settings: Optional Settings instance. If not provided,
            uses get_settings().
        log_level: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Override log format string.
        log_file: Optional path to log file for file logging.

    Returns:
        The configured package logger.

    Example:
        >>> from reasoning_structures.logging import setup_logging
        >>> logger = setup_logging(log_level="DEBUG")
        >>> logger.info("Session started")
    """
    if settings is None:
        from reasoning_structures.config import get_settings

        settings = get_settings()
    effective_level = log_level or settings.log_level
    effective_format = log_format or settings.log_format

    numeric_level = getattr(logging, effective_level.upper(), logging.INFO)

    logger.setLevel(numeric_level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    formatter = logging.Formatter(effective_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Prevent propagation to root logger
    logger.propagate = False

    _configure_structlog()
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger for a specific module.

    Args:
        name: The name of the module or component.

    Returns:
        A logger instance that is a child of the package logger.

    Example:
        >>> from reasoning_structures.logging import get_logger
        >>> get_logger("tools").name
        'reasoning_structures.tools'
    """
    if name.startswith("reasoning_structures.") or name == "reasoning_structures":
        return logging.getLogger(name)
    return logging.getLogger(f"reasoning_structures.{name}")


__all__ = [
    "get_logger",
    "logger",
    "setup_logging",
]
