"""
Logging Configuration
Sets up loguru sinks for the deployment run
"""

import os
import sys
from typing import Optional
from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}"


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None):
    """
    Route log records to stderr and, optionally, a rotating log file

    stdout is left to the deployment report lines.

    Args:
        level: Console log level (default: DEPLOY_LOG_LEVEL or INFO)
        log_file: Log file path (default: DEPLOY_LOG_FILE, unset = no file)
    """
    level = (level or os.getenv('DEPLOY_LOG_LEVEL') or "INFO").upper()
    log_file = log_file or os.getenv('DEPLOY_LOG_FILE')

    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level)

    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            format=FILE_FORMAT,
            level="DEBUG"
        )
