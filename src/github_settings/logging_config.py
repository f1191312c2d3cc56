"""Logging configuration utilities for github-settings.

The library logs through loguru. Applications (and the command line) choose what to see
with `configure_logger`.
"""

import sys
from typing import Literal

from loguru import logger

LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


def configure_logger(
    level: LogLevel = "INFO",
    *,
    format_string: str | None = None,
    colorize: bool = True,
) -> None:
    """Configure the github-settings logger.

    Args:
        level: The minimum log level to display.
        format_string: Custom format string for log messages. If None, uses default format.
        colorize: Whether to use colored output (default: True)

    Examples:
        ```python
        from github_settings.logging_config import configure_logger

        # Show every call made against the repository
        configure_logger("DEBUG")

        # Only report failures
        configure_logger("ERROR")
        ```
    """
    logger.remove()

    if format_string is None:
        format_string = (
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>"
        )

    logger.add(
        sys.stderr,
        level=level,
        format=format_string,
        colorize=colorize,
    )


__all__ = [
    "LogLevel",
    "configure_logger",
]
