"""
Logging Configuration Module

Provides consistent logging setup for the recovery library and the
recommendation service.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

DEFAULT_LOGGERS = ("recovery", "recommendations")


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None,
    names: Sequence[str] = DEFAULT_LOGGERS,
) -> list[logging.Logger]:
    """
    Configure the package loggers.

    Args:
        level: Logging level (default: INFO)
        log_file: Optional path to log file
        format_string: Optional custom format string
        names: Top-level logger names to configure

    Returns:
        The configured loggers
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    formatter = logging.Formatter(format_string, datefmt="%Y-%m-%d %H:%M:%S")

    handlers: list[logging.Handler] = []
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    loggers = []
    for name in names:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        # Remove existing handlers to avoid duplicates
        logger.handlers.clear()
        for handler in handlers:
            logger.addHandler(handler)
        logger.propagate = False
        loggers.append(logger)

    return loggers
