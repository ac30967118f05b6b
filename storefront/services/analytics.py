"""
Admin Aggregation Service for Storefront
========================================

Read-only rollups for the admin console. Every figure is recomputed from full
scans of the orders, users, and menu items on each request; nothing derived
is stored.

Key Functions:
--------------
- get_admin_stats: Dashboard figures (admin)
- get_all_customers: Users with order count and lifetime spend (admin)

Pure Reductions:
----------------
The arithmetic lives in plain functions that take already-loaded rows, so it
can be exercised without a database:

- start_of_local_day: Local midnight for a given instant and timezone
- compute_dashboard_stats: Order/revenue/menu counts
- compute_customer_stats: Per-user order count and spend

Revenue counts every order, cancelled ones included.
"""

import logging
from collections import Counter, defaultdict
from datetime import datetime, time
from decimal import Decimal
from typing import Dict, Iterable, List, Optional
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session

from .. import config
from ..errors import Result
from ..identity import VerifiedIdentity
from ..models import ORDER_STATUSES, MenuItem, Order, User, utcnow
from ..schemas.analytics import CustomerStatsOut, DashboardStats
from .helpers import as_utc, require_admin, to_money


logger = logging.getLogger(__name__)


# =============================================================================
# Pure Reductions
# =============================================================================

def start_of_local_day(now: datetime, tz_name: str) -> datetime:
    """Midnight at the start of ``now``'s calendar day in ``tz_name``."""
    tz = ZoneInfo(tz_name)
    local_now = as_utc(now).astimezone(tz)
    return datetime.combine(local_now.date(), time.min, tzinfo=tz)


def compute_dashboard_stats(
    orders: Iterable[Order],
    users: Iterable[User],
    menu_items: Iterable[MenuItem],
    day_start: datetime,
) -> DashboardStats:
    orders = list(orders)
    menu_items = list(menu_items)

    todays_orders = [o for o in orders if as_utc(o.created_at) >= day_start]
    by_status: Dict[str, int] = {status: 0 for status in ORDER_STATUSES}
    by_status.update(Counter(o.status for o in orders))

    total_revenue = sum((to_money(o.total_amount) for o in orders), Decimal("0"))
    today_revenue = sum((to_money(o.total_amount) for o in todays_orders), Decimal("0"))

    available = sum(1 for item in menu_items if item.is_available)
    ratio = available / len(menu_items) if menu_items else 0.0

    return DashboardStats(
        total_orders=len(orders),
        pending_orders=by_status["pending"],
        today_orders=len(todays_orders),
        total_revenue=total_revenue,
        today_revenue=today_revenue,
        orders_by_status=by_status,
        total_customers=sum(1 for _ in users),
        total_menu_items=len(menu_items),
        available_items=available,
        availability_ratio=round(ratio, 4),
    )


def compute_customer_stats(users: Iterable[User], orders: Iterable[Order]) -> List[CustomerStatsOut]:
    counts: Dict[int, int] = defaultdict(int)
    spent: Dict[int, Decimal] = defaultdict(Decimal)
    for order in orders:
        counts[order.user_id] += 1
        spent[order.user_id] += to_money(order.total_amount)

    return [
        CustomerStatsOut(
            id=user.id,
            external_id=user.external_id,
            email=user.email,
            name=user.name,
            phone=user.phone,
            is_admin=user.is_admin,
            created_at=user.created_at,
            order_count=counts[user.id],
            total_spent=spent[user.id],
        )
        for user in users
    ]


# =============================================================================
# Admin Queries
# =============================================================================

def get_admin_stats(
    db: Session,
    identity: Optional[VerifiedIdentity],
    now: Optional[datetime] = None,
) -> Result[DashboardStats]:
    admin = require_admin(db, identity)
    if not admin.is_ok:
        return Result.from_error(admin.error)

    day_start = start_of_local_day(now or utcnow(), config.STORE_TIMEZONE)
    stats = compute_dashboard_stats(
        orders=db.query(Order).all(),
        users=db.query(User).all(),
        menu_items=db.query(MenuItem).all(),
        day_start=day_start,
    )
    logger.debug("Dashboard stats computed from %d orders", stats.total_orders)
    return Result.ok(stats)


def get_all_customers(db: Session, identity: Optional[VerifiedIdentity]) -> Result[List[CustomerStatsOut]]:
    admin = require_admin(db, identity)
    if not admin.is_ok:
        return Result.from_error(admin.error)

    users = db.query(User).order_by(User.id.asc()).all()
    orders = db.query(Order).all()
    return Result.ok(compute_customer_stats(users, orders))
