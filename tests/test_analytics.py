"""Tests for dashboard and customer rollups."""

from datetime import datetime, timezone
from decimal import Decimal

from storefront.errors import ErrorKind
from storefront.models import MenuItem, Order, User
from storefront.schemas.orders import OrderCreate, OrderLineIn
from storefront.services import analytics
from storefront.services import order as order_service


DAY_START = datetime(2024, 6, 1, tzinfo=timezone.utc)


def _order(user_id, status, total, created_at):
    return Order(user_id=user_id, status=status, total_amount=Decimal(total), created_at=created_at)


# =============================================================================
# Pure Reduction Tests
# =============================================================================

def test_start_of_local_day_utc():
    now = datetime(2024, 6, 1, 15, 45, tzinfo=timezone.utc)
    assert analytics.start_of_local_day(now, "UTC") == DAY_START


def test_start_of_local_day_uses_store_timezone():
    # 03:30 UTC on the 10th is still the evening of the 9th in New York
    now = datetime(2024, 3, 10, 3, 30, tzinfo=timezone.utc)

    start = analytics.start_of_local_day(now, "America/New_York")

    assert start.astimezone(timezone.utc) == datetime(2024, 3, 9, 5, 0, tzinfo=timezone.utc)


def test_start_of_local_day_accepts_naive_utc():
    assert analytics.start_of_local_day(datetime(2024, 6, 1, 8, 0), "UTC") == DAY_START


def test_dashboard_stats():
    yesterday = datetime(2024, 5, 31, 23, 0, tzinfo=timezone.utc)
    today = datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc)
    orders = [
        _order(1, "pending", "10.00", today),
        _order(1, "cancelled", "4.50", today),
        _order(2, "delivered", "20.25", yesterday),
    ]
    users = [User(id=1), User(id=2), User(id=3)]
    items = [MenuItem(is_available=True), MenuItem(is_available=True), MenuItem(is_available=False)]

    stats = analytics.compute_dashboard_stats(orders, users, items, DAY_START)

    assert stats.total_orders == 3
    assert stats.pending_orders == 1
    assert stats.today_orders == 2
    # Cancelled orders still count towards revenue
    assert stats.total_revenue == 34.75
    assert stats.today_revenue == 14.5
    assert stats.total_customers == 3
    assert stats.total_menu_items == 3
    assert stats.available_items == 2
    assert stats.availability_ratio == 0.6667
    assert stats.orders_by_status == {
        "pending": 1, "confirmed": 0, "preparing": 0,
        "ready": 0, "delivered": 1, "cancelled": 1,
    }


def test_dashboard_stats_empty_store():
    stats = analytics.compute_dashboard_stats([], [], [], DAY_START)

    assert stats.total_orders == 0
    assert stats.total_revenue == 0
    assert stats.availability_ratio == 0.0
    assert set(stats.orders_by_status) == {
        "pending", "confirmed", "preparing", "ready", "delivered", "cancelled",
    }


def test_customer_stats():
    created = datetime(2024, 1, 1, tzinfo=timezone.utc)
    users = [
        User(id=1, external_id="a", email="a@example.com", name="A", is_admin=False, created_at=created),
        User(id=2, external_id="b", email="", name="B", is_admin=True, created_at=created),
    ]
    orders = [
        _order(1, "delivered", "12.10", created),
        _order(1, "cancelled", "0.90", created),
    ]

    stats = analytics.compute_customer_stats(users, orders)

    assert [(s.id, s.order_count, s.total_spent) for s in stats] == [(1, 2, 13.0), (2, 0, 0.0)]


# =============================================================================
# Admin Query Tests
# =============================================================================

def test_admin_stats_requires_admin(db_session, people):
    assert analytics.get_admin_stats(db_session, None).error.kind == ErrorKind.UNAUTHENTICATED
    assert analytics.get_admin_stats(db_session, people.customer).error.kind == ErrorKind.FORBIDDEN
    assert analytics.get_all_customers(db_session, people.other).error.kind == ErrorKind.FORBIDDEN


def test_admin_stats_from_database(db_session, menu, people):
    placed_at = datetime(2024, 6, 1, 10, 0, tzinfo=timezone.utc)
    payload = OrderCreate(
        items=[OrderLineIn(menu_item_id=menu.burger_id, quantity=2)],
        delivery_address="1 Main St",
        phone="555-0100",
    )
    order_service.create_order(db_session, people.customer, payload, now=placed_at)

    stats = analytics.get_admin_stats(
        db_session, people.admin, now=datetime(2024, 6, 1, 18, 0, tzinfo=timezone.utc)
    ).value

    assert stats.total_orders == 1
    assert stats.today_orders == 1
    assert stats.today_revenue == 10.0
    assert stats.total_customers == 3
    assert stats.total_menu_items == 4
    assert stats.available_items == 3

    next_day = analytics.get_admin_stats(
        db_session, people.admin, now=datetime(2024, 6, 2, 8, 0, tzinfo=timezone.utc)
    ).value
    assert next_day.today_orders == 0
    assert next_day.total_revenue == 10.0


def test_all_customers_from_database(db_session, menu, people):
    payload = OrderCreate(
        items=[OrderLineIn(menu_item_id=menu.fries_id, quantity=3)],
        delivery_address="1 Main St",
        phone="555-0100",
    )
    order_service.create_order(db_session, people.customer, payload)

    customers = {c.id: c for c in analytics.get_all_customers(db_session, people.admin).value}

    assert customers[people.customer_id].order_count == 1
    assert customers[people.customer_id].total_spent == 10.5
    assert customers[people.admin_id].order_count == 0
