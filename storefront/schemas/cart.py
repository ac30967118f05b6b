"""
Cart Schemas for Storefront
===========================

Request and response models for the per-customer cart and checkout.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .orders import MAX_LINE_QUANTITY


class CartItemAdd(BaseModel):
    menu_item_id: int
    quantity: int = Field(default=1, gt=0, le=MAX_LINE_QUANTITY)
    notes: Optional[str] = None


class CartItemUpdate(BaseModel):
    """Quantity of zero or less removes the line."""
    quantity: Optional[int] = Field(default=None, le=MAX_LINE_QUANTITY)
    notes: Optional[str] = None


class CartLineOut(BaseModel):
    menu_item_id: int
    name: str
    price: float
    quantity: int
    notes: Optional[str] = None
    image: Optional[str] = None
    line_total: float


class CartOut(BaseModel):
    items: List[CartLineOut]
    total_price: float
    total_items: int


class CheckoutRequest(BaseModel):
    delivery_address: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    notes: Optional[str] = None
