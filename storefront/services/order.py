"""
Order Lifecycle Service for Storefront
======================================

This module places orders, reads them back, and moves them through their
status lifecycle.

Key Functions:
--------------
- create_order: Validate lines, snapshot prices, persist order + items
- list_user_orders: The caller's orders, newest first
- get_order_details: One order with its lines (owner or admin)
- list_all_orders: Every order, filtered and paginated (admin)
- update_order_status: Set any of the six statuses (admin)
- cancel_order: Cancel an order (owner or admin)

Order Lifecycle:
----------------
    pending -> confirmed -> preparing -> ready -> delivered
    cancelled: from pending/confirmed (owner) or any non-terminal status (admin)

delivered and cancelled are terminal for cancellation. update_order_status
does NOT enforce the lifecycle: an admin may set any status from any status.
Transitions that are not lifecycle edges are logged at WARNING so they can be
reviewed, but they are applied.

Atomicity:
----------
create_order validates every line before writing anything, then writes the
user record (if needed), the order, and its items in a single commit. A
missing or unavailable menu item leaves the database unchanged.

Order Numbers:
--------------
"ORD-" followed by the creation instant in epoch milliseconds, written in
upper-case base 36 (e.g., "ORD-MGX1K3Q0"). Numbers increase with time but
are not checked for uniqueness.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional, Set

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import ErrorKind, Result
from ..identity import VerifiedIdentity
from ..models import MAX_MONEY, ORDER_STATUSES, MenuItem, Order, OrderItem, User, utcnow
from ..schemas.orders import (
    AdminOrderSummaryOut,
    OrderCreate,
    OrderCreatedOut,
    OrderCustomerOut,
    OrderDetailOut,
    OrderItemMenuRef,
    OrderItemOut,
    OrderListResponse,
    OrderSummaryOut,
)
from .helpers import find_user, require_admin, to_money


logger = logging.getLogger(__name__)


# =============================================================================
# Lifecycle Constants
# =============================================================================

TERMINAL_STATUSES = frozenset({"delivered", "cancelled"})
OWNER_CANCELLABLE_STATUSES = frozenset({"pending", "confirmed"})

LIFECYCLE_TRANSITIONS: Dict[str, Set[str]] = {
    "pending": {"confirmed", "cancelled"},
    "confirmed": {"preparing", "cancelled"},
    "preparing": {"ready", "cancelled"},
    "ready": {"delivered", "cancelled"},
    "delivered": set(),
    "cancelled": set(),
}

_BASE36_DIGITS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def is_lifecycle_transition(current: str, new: str) -> bool:
    """True if ``current -> new`` is an edge of the canonical lifecycle."""
    return new in LIFECYCLE_TRANSITIONS.get(current, set())


def generate_order_number(created_at: datetime) -> str:
    millis = int(created_at.timestamp() * 1000)
    digits = []
    while True:
        millis, remainder = divmod(millis, 36)
        digits.append(_BASE36_DIGITS[remainder])
        if millis == 0:
            break
    return "ORD-" + "".join(reversed(digits))


# =============================================================================
# Serialization
# =============================================================================

def _item_count(order: Order) -> int:
    return sum(item.quantity for item in order.items)


def summarize_order(order: Order) -> OrderSummaryOut:
    return OrderSummaryOut(
        id=order.id,
        order_number=order.order_number,
        status=order.status,
        total_amount=order.total_amount,
        delivery_address=order.delivery_address,
        phone=order.phone,
        notes=order.notes,
        created_at=order.created_at,
        updated_at=order.updated_at,
        item_count=_item_count(order),
    )


def _admin_summary(order: Order, customer: Optional[User]) -> AdminOrderSummaryOut:
    return AdminOrderSummaryOut(
        **summarize_order(order).model_dump(),
        customer_name=customer.name if customer is not None else "Unknown",
        customer_email=customer.email if customer is not None else "Unknown",
    )


def _detail(db: Session, order: Order, customer: User) -> OrderDetailOut:
    items: List[OrderItemOut] = []
    for line in order.items:
        menu_item = db.get(MenuItem, line.menu_item_id) if line.menu_item_id is not None else None
        items.append(OrderItemOut(
            id=line.id,
            menu_item_id=line.menu_item_id,
            quantity=line.quantity,
            price=line.price,
            item_name=line.item_name,
            notes=line.notes,
            line_total=to_money(line.price) * line.quantity,
            menu_item=(
                OrderItemMenuRef(name=menu_item.name, image=menu_item.image)
                if menu_item is not None else None
            ),
        ))

    return OrderDetailOut(
        id=order.id,
        order_number=order.order_number,
        status=order.status,
        total_amount=order.total_amount,
        delivery_address=order.delivery_address,
        phone=order.phone,
        notes=order.notes,
        created_at=order.created_at,
        updated_at=order.updated_at,
        items=items,
        user=OrderCustomerOut(name=customer.name, email=customer.email),
    )


# =============================================================================
# Order Placement
# =============================================================================

def create_order(
    db: Session,
    identity: Optional[VerifiedIdentity],
    payload: OrderCreate,
    now: Optional[datetime] = None,
) -> Result[OrderCreatedOut]:
    """
    Place an order for the caller.

    Every line's menu item must exist and be available. Prices and names are
    copied onto the order items and the total is their sum. If the caller
    has no user record one is created with the order's phone and address as
    profile defaults; an existing record missing either gets both filled in.

    Args:
        db: Database session
        identity: Verified caller
        payload: Lines, delivery address, phone, and optional notes
        now: Creation instant (defaults to the current UTC time)

    Returns:
        Result with the new order's id and number, or a VALIDATION error
        naming the first unknown or unavailable menu item.
    """
    if identity is None:
        return Result.fail(ErrorKind.UNAUTHENTICATED, "Unauthorized")

    if not payload.items:
        return Result.fail(ErrorKind.VALIDATION, "Order must contain at least one item")

    now = now or utcnow()

    # 1) Validation pass: nothing is written until every line checks out
    order_items: List[OrderItem] = []
    total = Decimal("0.00")
    for line in payload.items:
        if line.quantity <= 0:
            return Result.fail(
                ErrorKind.VALIDATION,
                "Quantity must be a positive integer",
                menu_item_id=line.menu_item_id,
                quantity=line.quantity,
            )

        menu_item = db.get(MenuItem, line.menu_item_id)
        if menu_item is None:
            return Result.fail(
                ErrorKind.VALIDATION,
                f"Menu item not found: {line.menu_item_id}",
                menu_item_id=line.menu_item_id,
            )
        if not menu_item.is_available:
            return Result.fail(
                ErrorKind.VALIDATION,
                f"Menu item not available: {menu_item.name}",
                menu_item_id=menu_item.id,
                menu_item_name=menu_item.name,
            )

        price = to_money(menu_item.price)
        total += price * line.quantity
        order_items.append(OrderItem(
            menu_item_id=menu_item.id,
            quantity=line.quantity,
            price=price,
            item_name=menu_item.name,
            notes=line.notes,
        ))

    if total > MAX_MONEY:
        return Result.fail(
            ErrorKind.VALIDATION,
            "Order total is too large",
            total=str(total),
            max_total=str(MAX_MONEY),
        )

    # 2) Write pass: user record, order, and items in one transaction
    try:
        user = find_user(db, identity.subject)
        if user is None:
            user = User(
                external_id=identity.subject,
                email=identity.email or "",
                name=identity.name or "Guest",
                phone=payload.phone,
                address=payload.delivery_address,
                is_admin=False,
                created_at=now,
            )
            db.add(user)
            db.flush()
            logger.info("Created user record id=%d while placing order", user.id)
        elif not user.phone or not user.address:
            user.phone = payload.phone
            user.address = payload.delivery_address

        order = Order(
            user_id=user.id,
            order_number=generate_order_number(now),
            status="pending",
            total_amount=to_money(total),
            delivery_address=payload.delivery_address,
            phone=payload.phone,
            notes=payload.notes,
            created_at=now,
            updated_at=now,
            items=order_items,
        )
        db.add(order)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Order placement failed; transaction rolled back")
        raise

    logger.info(
        "Order %s created (id=%d, lines=%d, total=%s)",
        order.order_number, order.id, len(order_items), order.total_amount,
    )
    return Result.ok(OrderCreatedOut(order_id=order.id, order_number=order.order_number))


# =============================================================================
# Reads
# =============================================================================

def list_user_orders(db: Session, identity: Optional[VerifiedIdentity]) -> Result[List[OrderSummaryOut]]:
    """The caller's orders, newest first. Anonymous callers get an empty list."""
    if identity is None:
        return Result.ok([])

    user = find_user(db, identity.subject)
    if user is None:
        return Result.ok([])

    orders = (
        db.query(Order)
        .filter(Order.user_id == user.id)
        .order_by(Order.created_at.desc(), Order.id.desc())
        .all()
    )
    return Result.ok([summarize_order(o) for o in orders])


def get_order_details(
    db: Session,
    identity: Optional[VerifiedIdentity],
    order_id: int,
) -> Result[OrderDetailOut]:
    """Full order detail. Only the owner or an admin may read it."""
    if identity is None:
        return Result.fail(ErrorKind.UNAUTHENTICATED, "Unauthorized")

    order = db.get(Order, order_id)
    if order is None:
        return Result.fail(ErrorKind.NOT_FOUND, "Order not found", order_id=order_id)

    caller = find_user(db, identity.subject)
    if caller is None or (order.user_id != caller.id and not caller.is_admin):
        return Result.fail(
            ErrorKind.FORBIDDEN,
            "Unauthorized: You can only view your own orders",
            order_id=order_id,
        )

    customer = order.user
    if customer is None:
        return Result.fail(ErrorKind.NOT_FOUND, "Order user not found", order_id=order_id)

    return Result.ok(_detail(db, order, customer))


def list_all_orders(
    db: Session,
    identity: Optional[VerifiedIdentity],
    status: Optional[str] = None,
    page: int = 1,
    page_size: int = 20,
) -> Result[OrderListResponse]:
    """
    Return a paginated list of every order, newest first. Admin only.

    Each entry carries the ordering customer's name and email, or "Unknown"
    when the user record is missing.
    """
    admin = require_admin(db, identity)
    if not admin.is_ok:
        return Result.from_error(admin.error)

    query = db.query(Order)
    if status is not None:
        query = query.filter(Order.status == status)

    total = query.count()
    offset = (page - 1) * page_size

    orders = (
        query.order_by(Order.created_at.desc(), Order.id.desc())
        .offset(offset)
        .limit(page_size)
        .all()
    )

    items = [_admin_summary(o, o.user) for o in orders]
    has_next = offset + len(items) < total

    return Result.ok(OrderListResponse(
        items=items,
        page=page,
        page_size=page_size,
        total=total,
        has_next=has_next,
    ))


# =============================================================================
# Status Changes
# =============================================================================

def update_order_status(
    db: Session,
    identity: Optional[VerifiedIdentity],
    order_id: int,
    status: str,
    now: Optional[datetime] = None,
) -> Result[OrderSummaryOut]:
    """
    Set an order's status. Admin only.

    Any of the six statuses may be set from any status; other values are a
    VALIDATION error and leave the order untouched. Transitions outside the
    canonical lifecycle are applied and logged at WARNING.
    """
    admin = require_admin(db, identity)
    if not admin.is_ok:
        return Result.from_error(admin.error)

    if status not in ORDER_STATUSES:
        return Result.fail(ErrorKind.VALIDATION, "Unknown order status", status=status)

    order = db.get(Order, order_id)
    if order is None:
        return Result.fail(ErrorKind.NOT_FOUND, "Order not found", order_id=order_id)

    previous = order.status
    if previous != status and not is_lifecycle_transition(previous, status):
        logger.warning(
            "Order %s moved %s -> %s outside the standard lifecycle (admin user id=%d)",
            order.order_number, previous, status, admin.value.id,
        )

    order.status = status
    order.updated_at = now or utcnow()
    db.commit()
    db.refresh(order)
    logger.info("Order %s status %s -> %s", order.order_number, previous, status)
    return Result.ok(summarize_order(order))


def cancel_order(
    db: Session,
    identity: Optional[VerifiedIdentity],
    order_id: int,
    now: Optional[datetime] = None,
) -> Result[OrderSummaryOut]:
    """
    Cancel an order.

    The owner may cancel while the order is pending or confirmed. An admin
    may cancel any order that is not yet delivered or cancelled.
    """
    if identity is None:
        return Result.fail(ErrorKind.UNAUTHENTICATED, "Unauthorized")

    order = db.get(Order, order_id)
    if order is None:
        return Result.fail(ErrorKind.NOT_FOUND, "Order not found", order_id=order_id)

    caller = find_user(db, identity.subject)
    if caller is None or (order.user_id != caller.id and not caller.is_admin):
        return Result.fail(
            ErrorKind.FORBIDDEN,
            "Unauthorized: You can only cancel your own orders",
            order_id=order_id,
        )

    if caller.is_admin:
        allowed = order.status not in TERMINAL_STATUSES
    else:
        allowed = order.status in OWNER_CANCELLABLE_STATUSES

    if not allowed:
        return Result.fail(
            ErrorKind.VALIDATION,
            "Order cannot be cancelled at this stage",
            order_id=order_id,
            status=order.status,
        )

    previous = order.status
    order.status = "cancelled"
    order.updated_at = now or utcnow()
    db.commit()
    db.refresh(order)
    logger.info("Order %s cancelled from %s (by user id=%d)", order.order_number, previous, caller.id)
    return Result.ok(summarize_order(order))
