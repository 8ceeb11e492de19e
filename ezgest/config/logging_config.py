# ezgest/config/logging_config.py
"""
Logging configuration for the API
"""

import sys
from pathlib import Path
from loguru import logger

from .setting import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logging(level: str = None, to_file: bool = None):
    """
    Configure loguru for console and, optionally, file logging

    Args:
        level: Console level, defaults to settings.LOG_LEVEL
        to_file: Whether to add the rotating file sinks, defaults to settings.LOG_TO_FILE
    """
    level = (level or settings.LOG_LEVEL).upper()
    to_file = settings.LOG_TO_FILE if to_file is None else to_file

    # Remove default handler
    logger.remove()

    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level)

    if to_file:
        log_dir = Path(settings.LOG_DIR)
        log_dir.mkdir(exist_ok=True)

        # Daily rotation
        logger.add(
            str(log_dir / "ezgest_{time:YYYY-MM-DD}.log"),
            format=FILE_FORMAT,
            rotation="1 day",
            retention="30 days",
            level="DEBUG",
            compression="zip"
        )

        # Errors kept longer
        logger.add(
            str(log_dir / "errors_{time:YYYY-MM-DD}.log"),
            format=FILE_FORMAT,
            level="ERROR",
            rotation="1 day",
            retention="60 days",
            compression="zip"
        )

        # Authentication and authorization decisions
        logger.add(
            str(log_dir / "access_{time:YYYY-MM-DD}.log"),
            format=FILE_FORMAT,
            filter=lambda record: record["name"].startswith(("ezgest.middleware", "ezgest.services.auth")),
            rotation="1 day",
            retention="14 days",
            level="INFO"
        )

    logger.info(f"Logging configured with level: {level}")
    return logger


def mask_email(email: str) -> str:
    """Shorten an email for log lines: alice@x.com -> al***@x.com"""
    if not email or "@" not in email:
        return "<invalid>"
    local, domain = email.split("@", 1)
    return f"{local[:2]}***@{domain}"
