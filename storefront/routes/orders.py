"""
Customer Order Routes for Storefront
====================================

Endpoints for placing and following orders.

Endpoints:
----------
- POST /orders: Place an order (rate limited)
- GET /orders: The caller's orders, newest first
- GET /orders/{id}: One order with its lines (owner or admin)
- POST /orders/{id}/cancel: Cancel while pending or confirmed

Authentication:
---------------
A verified bearer token is required to place, read, or cancel an order.
Listing without a token returns an empty list.

Rate Limiting:
--------------
POST /orders is limited per client address by RATE_LIMIT_ORDERS.

Usage:
------
    POST /orders
    {
        "items": [{"menu_item_id": 1, "quantity": 2}],
        "delivery_address": "12 Harbour St",
        "phone": "555-0100"
    }
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from ..config import get_rate_limit_orders
from ..db import get_db
from ..identity import VerifiedIdentity, get_identity
from ..limiter import limiter
from ..schemas.orders import OrderCreate, OrderCreatedOut, OrderDetailOut, OrderSummaryOut
from ..services import order as order_service


logger = logging.getLogger(__name__)

# Router definition
orders_router = APIRouter(prefix="/orders", tags=["Orders"])


@orders_router.post("", response_model=OrderCreatedOut, status_code=status.HTTP_201_CREATED)
@limiter.limit(get_rate_limit_orders)
def create_order(
    request: Request,
    payload: OrderCreate,
    db: Session = Depends(get_db),
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
) -> OrderCreatedOut:
    return order_service.create_order(db, identity, payload).unwrap()


@orders_router.get("", response_model=List[OrderSummaryOut])
def list_my_orders(
    db: Session = Depends(get_db),
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
) -> List[OrderSummaryOut]:
    return order_service.list_user_orders(db, identity).unwrap()


@orders_router.get("/{order_id}", response_model=OrderDetailOut)
def get_order(
    order_id: int,
    db: Session = Depends(get_db),
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
) -> OrderDetailOut:
    return order_service.get_order_details(db, identity, order_id).unwrap()


@orders_router.post("/{order_id}/cancel", response_model=OrderSummaryOut)
def cancel_order(
    order_id: int,
    db: Session = Depends(get_db),
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
) -> OrderSummaryOut:
    return order_service.cancel_order(db, identity, order_id).unwrap()
