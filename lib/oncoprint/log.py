"""
Logging setup for applications embedding OncoPrint.

The package logs through loguru's shared logger: warnings for alterations
drawn with the fallback style, debug messages for matrix builds and
viewport changes.
"""

from __future__ import annotations

import sys
from typing import Any

from loguru import logger

VERBOSITY_LEVELS = {
    0: "ERROR",
    1: "WARNING",
    2: "SUCCESS",
    3: "INFO",
    4: "DEBUG",
}

LOG_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan> | <level>{message}</level>"
)


def configure_logging(verbosity: int = 1, sink: Any = sys.stderr) -> int:
    """
    Replace loguru's handlers with a single sink filtered by verbosity.

    Args:
        verbosity: 0 (errors only) to 4 (debug); higher values mean debug
        sink: Any loguru sink, stderr by default

    Returns:
        The id of the added handler
    """
    logger.remove()
    level = VERBOSITY_LEVELS[min(max(verbosity, 0), 4)]
    return logger.add(sink, colorize=sink is sys.stderr, level=level, format=LOG_FORMAT)
