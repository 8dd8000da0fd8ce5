"""Loguru sink configuration for the service."""

import sys
from typing import Optional

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
    "<level>{message}</level>"
)


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Replace the default loguru sink with a stderr sink and optional file sink.

    Args:
        level: Minimum level for the stderr sink
        log_file: Path for a rotating DEBUG-level file sink (None disables)
    """
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level.upper(), colorize=True)
    if log_file:
        logger.add(log_file, rotation="10 MB", retention=5, level="DEBUG")
