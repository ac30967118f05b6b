"""
Order Schemas for Storefront
============================

This module defines Pydantic models for placing, reading, and administering
orders.

Endpoint Coverage:
------------------
- POST /orders: Place an order
- GET /orders, GET /orders/{id}: Customer order history and detail
- POST /orders/{id}/cancel: Cancel an order
- GET /admin/orders: List all orders with pagination and filtering
- PUT /admin/orders/{id}/status: Set an order's status

Order Lifecycle:
----------------
1. **pending**: Placed by the customer, not yet accepted
2. **confirmed**: Accepted by the kitchen
3. **preparing**: Being cooked
4. **ready**: Waiting for the courier
5. **delivered**: Handed to the customer (terminal)
6. **cancelled**: Cancelled by the customer or an admin (terminal)

Price Snapshots:
----------------
Each order item stores the unit price and item name at the moment the order
was placed. Later menu edits never change an existing order's lines or total.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


OrderStatus = Literal["pending", "confirmed", "preparing", "ready", "delivered", "cancelled"]

# Bounds keep a line total inside the Numeric(10, 2) money columns
MAX_LINE_QUANTITY = 99
MAX_ORDER_LINES = 100


class OrderLineIn(BaseModel):
    """One requested line: which menu item, how many, and an optional note."""
    menu_item_id: int
    quantity: int = Field(gt=0, le=MAX_LINE_QUANTITY)
    notes: Optional[str] = None


class OrderCreate(BaseModel):
    """
    Request model for placing an order.

    Example:
        {
            "items": [
                {"menu_item_id": 4, "quantity": 2},
                {"menu_item_id": 7, "quantity": 1, "notes": "no onions"}
            ],
            "delivery_address": "12 Baker St",
            "phone": "555-0100",
            "notes": "Ring twice"
        }
    """
    items: List[OrderLineIn] = Field(max_length=MAX_ORDER_LINES)
    delivery_address: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    notes: Optional[str] = None


class OrderCreatedOut(BaseModel):
    order_id: int
    order_number: str


class OrderSummaryOut(BaseModel):
    """
    Response model for order list views.

    Attributes:
        id: Database primary key
        order_number: Human-readable number (e.g., "ORD-LX2K9F3A")
        status: Current lifecycle status
        total_amount: Sum of line totals at order time
        delivery_address: Where the order is delivered
        phone: Contact number given at checkout
        notes: Order-level notes
        created_at / updated_at: Timestamps
        item_count: Total quantity across all lines
    """
    model_config = ConfigDict(from_attributes=True)

    id: int
    order_number: str
    status: OrderStatus
    total_amount: float
    delivery_address: str
    phone: str
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    item_count: int


class AdminOrderSummaryOut(OrderSummaryOut):
    """Order summary for the admin list, with the ordering customer."""
    customer_name: str
    customer_email: str


class OrderListResponse(BaseModel):
    """Paginated response for the admin order list."""
    items: List[AdminOrderSummaryOut]
    page: int
    page_size: int
    total: int
    has_next: bool


class OrderItemMenuRef(BaseModel):
    name: str
    image: Optional[str] = None


class OrderItemOut(BaseModel):
    """
    Response model for an order line.

    ``price`` and ``item_name`` are the snapshot taken at order time;
    ``menu_item`` is the current catalog entry, or None if it was deleted.
    """
    id: int
    menu_item_id: Optional[int] = None
    quantity: int
    price: float
    item_name: str
    notes: Optional[str] = None
    line_total: float
    menu_item: Optional[OrderItemMenuRef] = None


class OrderCustomerOut(BaseModel):
    name: str
    email: str


class OrderDetailOut(BaseModel):
    """Full order with its lines and the ordering customer."""
    id: int
    order_number: str
    status: OrderStatus
    total_amount: float
    delivery_address: str
    phone: str
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    items: List[OrderItemOut]
    user: OrderCustomerOut


class OrderStatusUpdate(BaseModel):
    status: OrderStatus
