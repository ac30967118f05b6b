"""
Schemas Package for Storefront
==============================

This package contains all Pydantic models (schemas) used for API request
validation and response serialization.

Schema Organization:
--------------------
- **menu.py**: Category and menu item schemas
- **orders.py**: Order placement, detail, and admin listing schemas
- **users.py**: User directory schemas
- **analytics.py**: Dashboard and customer rollups
- **cart.py**: Cart and checkout schemas

Naming Conventions:
-------------------
- *Out: Response models (e.g., MenuItemOut) - what API returns
- *Create: Request models for POST (e.g., MenuItemCreate)
- *Update: Request models for PUT (e.g., MenuItemUpdate)
- *Request / *Response: Other request and response bodies

Usage:
------
    from storefront.schemas import MenuItemOut, OrderCreate
"""

# Menu schemas
from .menu import (
    CategoryOut,
    CategoryCreate,
    CategoryUpdate,
    CategoryRef,
    CategoryDetailRef,
    MenuItemOut,
    MenuItemDetailOut,
    MenuItemCreate,
    MenuItemUpdate,
)

# Order schemas
from .orders import (
    OrderStatus,
    OrderLineIn,
    OrderCreate,
    OrderCreatedOut,
    OrderSummaryOut,
    AdminOrderSummaryOut,
    OrderListResponse,
    OrderItemOut,
    OrderDetailOut,
    OrderStatusUpdate,
)

# User schemas
from .users import (
    UserOut,
    EnsureUserOut,
    ProfileUpdate,
    AdminFlagOut,
)

# Analytics schemas
from .analytics import (
    DashboardStats,
    CustomerStatsOut,
)

# Cart schemas
from .cart import (
    CartItemAdd,
    CartItemUpdate,
    CartLineOut,
    CartOut,
    CheckoutRequest,
)

__all__ = [
    # Menu
    "CategoryOut",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryRef",
    "CategoryDetailRef",
    "MenuItemOut",
    "MenuItemDetailOut",
    "MenuItemCreate",
    "MenuItemUpdate",
    # Orders
    "OrderStatus",
    "OrderLineIn",
    "OrderCreate",
    "OrderCreatedOut",
    "OrderSummaryOut",
    "AdminOrderSummaryOut",
    "OrderListResponse",
    "OrderItemOut",
    "OrderDetailOut",
    "OrderStatusUpdate",
    # Users
    "UserOut",
    "EnsureUserOut",
    "ProfileUpdate",
    "AdminFlagOut",
    # Analytics
    "DashboardStats",
    "CustomerStatsOut",
    # Cart
    "CartItemAdd",
    "CartItemUpdate",
    "CartLineOut",
    "CartOut",
    "CheckoutRequest",
]
