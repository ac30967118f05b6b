"""
Admin Orders Routes for Storefront
==================================

This module contains admin endpoints for viewing and managing customer orders.

Endpoints:
----------
- GET /admin/orders: List orders with pagination and filtering
- PUT /admin/orders/{id}/status: Set an order's status

Authentication:
---------------
All endpoints require a verified bearer token belonging to a user with the
admin flag set.

Filtering:
----------
Orders can be filtered by status:
- ?status=pending - Only pending orders
- ?status=preparing - Only orders in the kitchen
- No status parameter - All orders

Pagination:
-----------
Uses page/page_size parameters:
- ?page=1&page_size=20 (defaults)
- Returns total count and has_next flag for navigation

Status Changes:
---------------
Any of the six statuses may be set from any status. Moves that skip or
reverse the normal lifecycle are applied and logged at WARNING.

Usage:
------
    # List pending orders
    GET /admin/orders?status=pending&page=1&page_size=20

    # Start preparing an order
    PUT /admin/orders/123/status
    {"status": "preparing"}
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from .. import config
from ..db import get_db
from ..identity import VerifiedIdentity, get_identity
from ..schemas.orders import OrderListResponse, OrderStatus, OrderStatusUpdate, OrderSummaryOut
from ..services import order as order_service


logger = logging.getLogger(__name__)

# Router definition
admin_orders_router = APIRouter(prefix="/admin/orders", tags=["Admin - Orders"])


# =============================================================================
# Order Endpoints
# =============================================================================

@admin_orders_router.get("", response_model=OrderListResponse)
def list_orders(
    db: Session = Depends(get_db),
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
    status: Optional[OrderStatus] = Query(
        None,
        description="Filter by status, or leave empty for all",
    ),
    page: int = Query(1, ge=1),
    page_size: int = Query(config.DEFAULT_PAGE_SIZE, ge=1, le=config.MAX_PAGE_SIZE),
) -> OrderListResponse:
    """
    Return a paginated list of orders, newest first.

    Each entry includes the customer's name and email.
    """
    return order_service.list_all_orders(
        db, identity, status=status, page=page, page_size=page_size,
    ).unwrap()


@admin_orders_router.put("/{order_id}/status", response_model=OrderSummaryOut)
def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    db: Session = Depends(get_db),
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
) -> OrderSummaryOut:
    return order_service.update_order_status(db, identity, order_id, payload.status).unwrap()
