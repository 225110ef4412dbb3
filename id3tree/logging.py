"""
Logging setup.

The library only creates module loggers; handlers are installed by the
command-line entry point through setup_logging().
"""

import logging
import sys
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: str = "INFO",
    format_string: Optional[str] = None
) -> None:
    """
    Configure root logging with a stderr handler, keeping stdout for results.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR)
        format_string: Custom format string (uses DEFAULT_FORMAT if None)

    Raises:
        ValueError: If level is not a known logging level name
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    logging.basicConfig(
        level=numeric_level,
        format=format_string or DEFAULT_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module (name is typically __name__)."""
    return logging.getLogger(name)
