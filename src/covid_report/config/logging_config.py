"""
COVID-19 Report - Centralized Logging Configuration

This module provides centralized logging configuration for the entire project.
Ensures consistent log formatting, levels, and output across all modules.
Log records go to stderr so that stdout only carries the rendered report.
"""

import logging
import sys
from typing import Optional

from .constants import LOG_FORMAT, LOG_LEVEL

# -v raises WARNING to INFO, -vv to DEBUG
VERBOSITY_LEVELS = ["WARNING", "INFO", "DEBUG"]


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger for a covid_report module.

    Args:
        name: Logger name (defaults to the package logger)

    Returns:
        Logger instance
    """
    return logging.getLogger(name or "covid_report")


def configure_logging(
    level: str = LOG_LEVEL,
    format_string: str = LOG_FORMAT,
    stream=None,
    suppress_external: bool = True,
) -> None:
    """
    Configure logging for the entire application.

    Args:
        level: Global logging level
        format_string: Log message format
        stream: Output stream (defaults to stderr)
        suppress_external: Whether to suppress verbose external library logs
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=format_string,
        stream=stream or sys.stderr,
        force=True,  # Override any existing configuration
    )

    if suppress_external:
        for logger_name in ("urllib3.connectionpool", "requests.packages.urllib3"):
            logging.getLogger(logger_name).setLevel(logging.WARNING)


def level_for_verbosity(verbosity: int) -> str:
    """Map a count of -v flags to a logging level name."""
    index = max(0, min(verbosity, len(VERBOSITY_LEVELS) - 1))
    return VERBOSITY_LEVELS[index]
