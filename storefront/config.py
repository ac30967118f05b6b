"""
Configuration Module for Storefront
===================================

This module centralizes all configuration settings, environment variables, and
constants used throughout the Storefront application. Values are read once at
import time; tests and scripts may override the module attributes directly.

Configuration Categories:
-------------------------
- **Database**: Connection URL for the SQLAlchemy engine.

- **Identity**: Key material and claim checks used to verify the bearer tokens
  issued by the external identity provider.

- **Store**: Timezone used to find the local midnight boundary for the
  dashboard's "today" figures.

- **Rate Limiting**: Throttling for order placement.

- **Pagination**: Defaults and caps for admin listings.

- **CORS Settings**: Cross-Origin Resource Sharing for the storefront UI.

Environment Variables:
----------------------
- DATABASE_URL: SQLAlchemy URL (default: "sqlite:///./storefront.db")
- IDENTITY_JWT_KEY: Secret or public key used to verify identity tokens
- IDENTITY_JWT_ALGORITHMS: Comma-separated algorithms (default: "HS256")
- IDENTITY_AUDIENCE: Expected "aud" claim (optional)
- IDENTITY_ISSUER: Expected "iss" claim (optional)
- STORE_TIMEZONE: IANA timezone name (default: "UTC")
- RATE_LIMIT_ORDERS: Order endpoint rate limit (default: "10 per minute")
- RATE_LIMIT_ENABLED: Enable/disable rate limiting (default: "true")
- CART_TTL_SECONDS: Idle in-memory cart lifetime (default: 604800)
- CART_MAX_STORED: Max in-memory carts (default: 10000)
- DEFAULT_PAGE_SIZE / MAX_PAGE_SIZE: Admin listing pagination (20 / 100)
- CORS_ORIGINS: Comma-separated allowed origins (default: "*")

Usage:
------
    from storefront import config

    if config.RATE_LIMIT_ENABLED:
        ...
"""

import os
from typing import List


# =============================================================================
# Database Configuration
# =============================================================================

DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./storefront.db")


# =============================================================================
# Identity Provider Configuration
# =============================================================================
# Tokens are verified at the HTTP boundary before any identity reaches the
# services. An empty key means no token can be verified.

IDENTITY_JWT_KEY: str = os.getenv("IDENTITY_JWT_KEY", "")
IDENTITY_JWT_ALGORITHMS: List[str] = [
    alg.strip()
    for alg in os.getenv("IDENTITY_JWT_ALGORITHMS", "HS256").split(",")
    if alg.strip()
]
IDENTITY_AUDIENCE: str = os.getenv("IDENTITY_AUDIENCE", "")
IDENTITY_ISSUER: str = os.getenv("IDENTITY_ISSUER", "")


# =============================================================================
# Store Configuration
# =============================================================================

# Dashboard "today" figures start at midnight in this timezone
STORE_TIMEZONE: str = os.getenv("STORE_TIMEZONE", "UTC")


# =============================================================================
# Rate Limiting Configuration
# =============================================================================
# Rate limit format: "X per Y" where Y is second, minute, hour, or day

RATE_LIMIT_ORDERS: str = os.getenv("RATE_LIMIT_ORDERS", "10 per minute")
RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"


def get_rate_limit_orders() -> str:
    """
    Return the current order placement rate limit.

    Read through a function so tests can change RATE_LIMIT_ORDERS without
    re-importing the routes.
    """
    return RATE_LIMIT_ORDERS


# =============================================================================
# Cart Storage Configuration
# =============================================================================
# In-memory carts idle longer than the TTL are dropped; past the size cap the
# least recently saved cart is evicted.

CART_TTL_SECONDS: int = int(os.getenv("CART_TTL_SECONDS", "604800"))  # 7 days
CART_MAX_STORED: int = int(os.getenv("CART_MAX_STORED", "10000"))


# =============================================================================
# Pagination Configuration
# =============================================================================

DEFAULT_PAGE_SIZE: int = int(os.getenv("DEFAULT_PAGE_SIZE", "20"))
MAX_PAGE_SIZE: int = int(os.getenv("MAX_PAGE_SIZE", "100"))


# =============================================================================
# CORS Configuration
# =============================================================================
# Format: comma-separated list of origins, e.g., "https://shop.example.com"
# Default "*" allows all origins (suitable for development only)

_cors_origins_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in _cors_origins_env.split(",")
    if origin.strip()
] or ["*"]
