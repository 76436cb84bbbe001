"""
Logging setup - loguru sinks configured from settings.
"""

import sys

from loguru import logger

from jobportal.core.config import get_settings


def setup_logging() -> None:
    """Replace the default loguru sink with the configured level/file."""
    settings = get_settings()
    level = "DEBUG" if settings.debug else settings.log_level.upper()

    logger.remove()
    logger.add(sys.stderr, level=level)
    if settings.log_file:
        logger.add(settings.log_file, level=level, rotation="1 day", retention="7 days")
