"""
Cart Routes for Storefront
==========================

Server-side cart for the signed-in customer, keyed by the identity
provider's subject. Carts live in ``CART_STORAGE`` (process memory) and are
lost on restart.

Endpoints:
----------
- GET /cart: Lines, total price, and item count
- POST /cart/items: Add an item (merges with an existing line)
- PUT /cart/items/{menu_item_id}: Change quantity (<= 0 removes) or notes
- DELETE /cart/items/{menu_item_id}: Remove a line
- DELETE /cart: Empty the cart
- POST /cart/checkout: Place an order from the cart (rate limited)

Checkout:
---------
The cart's lines are submitted as a regular order, so current menu prices
and availability apply. The cart is emptied only when the order is placed.
"""

import logging
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from ..cart import Cart, CartLine, InMemoryCartStorage
from ..config import get_rate_limit_orders
from ..db import get_db
from ..errors import ErrorKind, ServiceError, ServiceFailure
from ..identity import VerifiedIdentity, get_identity
from ..limiter import limiter
from ..schemas.cart import CartItemAdd, CartItemUpdate, CartLineOut, CartOut, CheckoutRequest
from ..schemas.orders import OrderCreate, OrderCreatedOut
from ..services import catalog, order as order_service


logger = logging.getLogger(__name__)

# Router definition
cart_router = APIRouter(prefix="/cart", tags=["Cart"])

CART_STORAGE = InMemoryCartStorage()


def get_cart(identity: Optional[VerifiedIdentity] = Depends(get_identity)) -> Cart:
    """FastAPI dependency yielding the caller's cart. Anonymous callers get 401."""
    if identity is None:
        raise ServiceFailure(ServiceError(ErrorKind.UNAUTHENTICATED, "Unauthorized"))
    return Cart(CART_STORAGE, key=identity.subject)


def _cart_out(cart: Cart) -> CartOut:
    return CartOut(
        items=[
            CartLineOut(
                menu_item_id=line.menu_item_id,
                name=line.name,
                price=line.price,
                quantity=line.quantity,
                notes=line.notes,
                image=line.image,
                line_total=line.line_total,
            )
            for line in cart.lines
        ],
        total_price=cart.total_price(),
        total_items=cart.total_items(),
    )


@cart_router.get("", response_model=CartOut)
def view_cart(cart: Cart = Depends(get_cart)) -> CartOut:
    return _cart_out(cart)


@cart_router.post("/items", response_model=CartOut)
def add_to_cart(
    payload: CartItemAdd,
    db: Session = Depends(get_db),
    cart: Cart = Depends(get_cart),
) -> CartOut:
    item = catalog.get_orderable_item(db, payload.menu_item_id).unwrap()
    try:
        cart.add_item(CartLine(
            menu_item_id=item.id,
            name=item.name,
            price=Decimal(str(item.price)),
            quantity=payload.quantity,
            notes=payload.notes,
            image=item.image,
        ))
    except ValueError as exc:
        raise ServiceFailure(ServiceError(
            ErrorKind.VALIDATION, str(exc), {"menu_item_id": item.id}
        ))
    return _cart_out(cart)


@cart_router.put("/items/{menu_item_id}", response_model=CartOut)
def update_cart_item(
    menu_item_id: int,
    payload: CartItemUpdate,
    cart: Cart = Depends(get_cart),
) -> CartOut:
    if cart.get_line(menu_item_id) is None:
        raise ServiceFailure(ServiceError(
            ErrorKind.NOT_FOUND, "Item not in cart", {"menu_item_id": menu_item_id}
        ))

    if payload.notes is not None:
        cart.update_notes(menu_item_id, payload.notes)
    if payload.quantity is not None:
        cart.update_quantity(menu_item_id, payload.quantity)
    return _cart_out(cart)


@cart_router.delete("/items/{menu_item_id}", response_model=CartOut)
def remove_cart_item(menu_item_id: int, cart: Cart = Depends(get_cart)) -> CartOut:
    cart.remove_item(menu_item_id)
    return _cart_out(cart)


@cart_router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def clear_cart(cart: Cart = Depends(get_cart)) -> None:
    cart.clear()
    return None


@cart_router.post("/checkout", response_model=OrderCreatedOut, status_code=status.HTTP_201_CREATED)
@limiter.limit(get_rate_limit_orders)
def checkout(
    request: Request,
    payload: CheckoutRequest,
    db: Session = Depends(get_db),
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
    cart: Cart = Depends(get_cart),
) -> OrderCreatedOut:
    """Place an order from the cart's lines, then empty the cart."""
    if cart.is_empty():
        raise ServiceFailure(ServiceError(ErrorKind.VALIDATION, "Cart is empty"))

    created = order_service.create_order(
        db,
        identity,
        OrderCreate(
            items=cart.to_order_lines(),
            delivery_address=payload.delivery_address,
            phone=payload.phone,
            notes=payload.notes,
        ),
    ).unwrap()

    cart.clear()
    logger.info("Checked out cart as order %s", created.order_number)
    return created
