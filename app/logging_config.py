import sys

from loguru import logger

from app.config import settings


def configure_logging() -> None:
    """Route loguru output to stderr at the configured LOG_LEVEL"""
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.LOG_LEVEL.upper(),
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
        backtrace=settings.DEBUG,
        diagnose=settings.DEBUG,
    )
