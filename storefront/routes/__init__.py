"""
Routes Package for Storefront
=============================

This package contains all API route definitions organized by domain. Each module
defines a FastAPI APIRouter with related endpoints grouped together.

Architecture Overview:
----------------------
**Customer-Facing Routes:**
- menu.py: Public category and menu browsing (no auth required)
- users.py: The signed-in customer's own record
- cart.py: Server-side cart and checkout
- orders.py: Placing, listing, and cancelling orders

**Admin Routes (require an admin user):**
- admin_menu.py: Category and menu item CRUD
- admin_orders.py: Order listing and status changes
- admin_analytics.py: Dashboard, customer list, and promotion

Router Registration:
--------------------
All routers are registered by ``create_app`` under two prefixes:
1. /api/v1/* - Versioned API (recommended)
2. /* - Root paths

Route Dependencies:
-------------------
Common dependencies are injected via FastAPI's Depends():
- get_db: Database session for queries
- get_identity: Verified bearer-token identity (None when anonymous)
- limiter.limit(): Rate limiting

Error Handling:
---------------
Routes call ``Result.unwrap()`` on service results. Failures are rendered by
``common.service_failure_handler``:
- 400: Validation (unavailable item, non-cancellable order, ...)
- 401: Unauthenticated (no token, or an invalid one)
- 403: Forbidden (not the owner, not an admin)
- 404: Not found (invalid ID)
- 429: Too many requests (rate limited)
- 503: Identity verification not configured
"""

from .menu import public_categories_router, public_menu_router
from .users import users_router
from .cart import cart_router
from .orders import orders_router
from .admin_menu import admin_categories_router, admin_menu_router
from .admin_orders import admin_orders_router
from .admin_analytics import admin_analytics_router

ALL_ROUTERS = [
    public_categories_router,
    public_menu_router,
    users_router,
    cart_router,
    orders_router,
    admin_categories_router,
    admin_menu_router,
    admin_orders_router,
    admin_analytics_router,
]

__all__ = [
    "public_categories_router",
    "public_menu_router",
    "users_router",
    "cart_router",
    "orders_router",
    "admin_categories_router",
    "admin_menu_router",
    "admin_orders_router",
    "admin_analytics_router",
    "ALL_ROUTERS",
]
