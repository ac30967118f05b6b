"""
Services Package for Storefront
===============================

Business logic behind the routes. Every service function takes a SQLAlchemy
session (and, where the caller matters, a ``VerifiedIdentity``) and returns
a ``Result`` from ``storefront.errors``.

Available Services:
-------------------
- **users**: User directory and admin promotion
- **catalog**: Categories and menu items
- **order**: Order placement, reads, and status lifecycle
- **analytics**: Dashboard and customer rollups
- **helpers**: Shared lookups and money/time conversions

Usage:
------
    from storefront.services.order import create_order
    from storefront.services import catalog, order
"""

from . import helpers
from . import users
from . import catalog
from . import order
from . import analytics

__all__ = ["helpers", "users", "catalog", "order", "analytics"]
