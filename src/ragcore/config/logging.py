"""Loguru sink configuration driven by ``Settings.LOG_LEVEL``."""

import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "INFO") -> int:
    """Replace loguru's default sink with a single stderr sink.

    Args:
        level: Minimum level name (e.g. "DEBUG", "INFO")

    Returns:
        The id of the installed sink
    """
    logger.remove()
    return logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT, enqueue=False)
