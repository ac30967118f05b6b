"""
Analytics Schemas for Storefront
================================

This module defines Pydantic models for the admin dashboard and customer list.
Both are computed on every request from the full order, user, and menu
collections; nothing here is persisted.

Endpoint Coverage:
------------------
- GET /admin/stats: Dashboard figures
- GET /admin/customers: Every user with their order count and spend

"Today" Boundary:
-----------------
Today's orders and revenue count orders created at or after local midnight
in STORE_TIMEZONE (see config.py).

Revenue:
--------
Revenue sums ``total_amount`` over all orders, whatever their status.
"""

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel


class DashboardStats(BaseModel):
    """
    Response model for the admin dashboard.

    Attributes:
        total_orders: Number of orders ever placed
        pending_orders: Orders still in "pending"
        today_orders: Orders placed since local midnight
        total_revenue: Sum of all order totals
        today_revenue: Sum of totals for today's orders
        orders_by_status: Count per status (every status present)
        total_customers: Number of user records
        total_menu_items: Number of menu items
        available_items: Menu items currently orderable
        availability_ratio: available_items / total_menu_items (0.0 when empty)
    """
    total_orders: int
    pending_orders: int
    today_orders: int
    total_revenue: float
    today_revenue: float
    orders_by_status: Dict[str, int]
    total_customers: int
    total_menu_items: int
    available_items: int
    availability_ratio: float


class CustomerStatsOut(BaseModel):
    """A user record with lifetime order count and spend."""
    id: int
    external_id: str
    email: str
    name: str
    phone: Optional[str] = None
    is_admin: bool
    created_at: datetime
    order_count: int
    total_spent: float
