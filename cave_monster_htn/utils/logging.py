"""
Logging configuration for the planner and its CLI
"""

import logging
import sys
from typing import Optional

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def setup_logging(
    level: Optional[str] = None,
    verbose: bool = False,
    format_string: Optional[str] = None
) -> None:
    """
    Set up logging configuration for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        verbose: If True, enable DEBUG level logging
        format_string: Custom format string for log messages

    Raises:
        ValueError: If the level is not a known log level name
    """
    if verbose:
        level = "DEBUG"
    elif level is None:
        level = "WARNING"

    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    level_name = str(level).upper()
    if level_name not in LOG_LEVELS:
        raise ValueError(
            f"Unknown log level {level!r}; expected one of {', '.join(LOG_LEVELS)}"
        )

    # Log to stderr so JSON on stdout stays clean
    logging.basicConfig(
        level=getattr(logging, level_name),
        format=format_string,
        handlers=[
            logging.StreamHandler(sys.stderr)
        ],
        force=True
    )
