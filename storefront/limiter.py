"""
Rate limiter shared by the routes and the application factory.

Uses in-memory storage by default. For production with multiple workers,
use Redis: Limiter(key_func=..., storage_uri="redis://...")
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from . import config


limiter = Limiter(key_func=get_remote_address, enabled=config.RATE_LIMIT_ENABLED)
