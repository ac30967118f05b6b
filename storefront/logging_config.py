"""
Logging configuration for the storefront application.

Usage:
    from storefront.logging_config import setup_logging
    setup_logging()  # Call once at application or CLI startup

Environment variables:
    LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, or CRITICAL (default: INFO)

Customer contact details (phone, address) are never written at INFO or
above; services log ids, order numbers, and statuses instead.
"""
import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Quieted to WARNING unless running at DEBUG
NOISY_LOGGERS = ("httpx", "sqlalchemy.engine", "uvicorn.access", "alembic.runtime.migration")


def resolve_level(level: Optional[str] = None) -> str:
    """Return a valid level name from ``level`` or LOG_LEVEL, falling back to INFO."""
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    level = level.strip().upper()
    return level if level in VALID_LEVELS else "INFO"


def setup_logging(level: Optional[str] = None) -> int:
    """
    Configure logging for the application.

    Args:
        level: Log level name. If not provided, reads LOG_LEVEL.

    Returns:
        The numeric level applied to the ``storefront`` logger.
    """
    level_name = resolve_level(level)
    numeric_level = getattr(logging, level_name)

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stdout,
    )
    logging.getLogger("storefront").setLevel(numeric_level)

    third_party_level = logging.NOTSET if level_name == "DEBUG" else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)

    logging.getLogger(__name__).debug("Logging configured at %s level", level_name)
    return numeric_level
