"""Tests for catalog browsing and admin catalog management."""

from decimal import Decimal

from storefront.errors import ErrorKind
from storefront.models import Category, MenuItem
from storefront.schemas.menu import CategoryCreate, CategoryUpdate, MenuItemCreate, MenuItemUpdate
from storefront.services import catalog


def test_list_categories_sorted_by_display_order(db_session, menu):
    db_session.add(Category(name="Specials", display_order=0, is_active=False))
    db_session.commit()

    everything = catalog.list_categories(db_session).value
    active = catalog.list_categories(db_session, active_only=True).value

    assert [c.name for c in everything] == ["Specials", "Mains", "Drinks"]
    assert [c.name for c in active] == ["Mains", "Drinks"]


def test_menu_filters_combine(db_session, menu):
    all_items = catalog.list_menu_items(db_session).value
    mains_available = catalog.list_menu_items(
        db_session, category_id=menu.mains_id, available_only=True
    ).value
    featured = catalog.list_menu_items(db_session, featured_only=True).value

    assert len(all_items) == 4
    assert [i.name for i in mains_available] == ["Burger", "Fries"]
    assert [i.name for i in featured] == ["Burger"]
    assert mains_available[0].category.name == "Mains"


def test_menu_item_with_missing_category_shows_unknown(db_session, menu):
    # Drop the category row directly; the catalog service would refuse
    db_session.query(Category).filter(Category.id == menu.drinks_id).delete()
    db_session.commit()
    db_session.expire_all()

    items = catalog.list_menu_items(db_session, category_id=menu.drinks_id).value

    assert items[0].category.id == menu.drinks_id
    assert items[0].category.name == "Unknown"


def test_get_menu_item_includes_category_description(db_session, menu):
    item = catalog.get_menu_item(db_session, menu.burger_id).value
    assert item.price == 5.0
    assert item.category.description == "Hot food"


def test_get_menu_item_missing(db_session):
    assert catalog.get_menu_item(db_session, 12345).error.kind == ErrorKind.NOT_FOUND


def test_get_orderable_item(db_session, menu):
    assert catalog.get_orderable_item(db_session, menu.burger_id).value.name == "Burger"
    assert catalog.get_orderable_item(db_session, menu.soup_id).error.kind == ErrorKind.VALIDATION
    assert catalog.get_orderable_item(db_session, 999).error.kind == ErrorKind.NOT_FOUND


def test_category_admin_ops_require_admin(db_session, people):
    payload = CategoryCreate(name="Desserts")

    assert catalog.create_category(db_session, None, payload).error.kind == ErrorKind.UNAUTHENTICATED
    assert catalog.create_category(db_session, people.customer, payload).error.kind == ErrorKind.FORBIDDEN
    assert db_session.query(Category).count() == 0


def test_create_and_update_category(db_session, people):
    created = catalog.create_category(
        db_session, people.admin, CategoryCreate(name="Desserts", display_order=5)
    ).value

    updated = catalog.update_category(
        db_session, people.admin, created.id, CategoryUpdate(is_active=False, description=None)
    ).value

    assert updated.name == "Desserts"
    assert updated.display_order == 5
    assert updated.is_active is False


def test_delete_category_with_items_is_refused(db_session, menu, people):
    result = catalog.delete_category(db_session, people.admin, menu.mains_id)

    assert result.error.kind == ErrorKind.VALIDATION
    assert result.error.message == "Cannot delete category with menu items"
    assert result.error.context["menu_item_count"] == 3
    assert db_session.get(Category, menu.mains_id) is not None
    assert db_session.query(MenuItem).filter(MenuItem.category_id == menu.mains_id).count() == 3


def test_delete_empty_category(db_session, menu, people):
    empty = catalog.create_category(db_session, people.admin, CategoryCreate(name="Empty")).value

    assert catalog.delete_category(db_session, people.admin, empty.id).is_ok
    assert db_session.get(Category, empty.id) is None


def test_create_menu_item_needs_existing_category(db_session, menu, people):
    missing = catalog.create_menu_item(
        db_session, people.admin, MenuItemCreate(name="Pie", price=Decimal("4"), category_id=999)
    )
    created = catalog.create_menu_item(
        db_session, people.admin,
        MenuItemCreate(name="Pie", price=Decimal("4.255"), category_id=menu.mains_id),
    )

    assert missing.error.kind == ErrorKind.NOT_FOUND
    assert created.value.price == 4.26
    assert created.value.category.name == "Mains"


def test_update_menu_item_is_partial(db_session, menu, people):
    updated = catalog.update_menu_item(
        db_session, people.admin, menu.burger_id, MenuItemUpdate(is_available=False)
    ).value

    assert updated.is_available is False
    assert updated.name == "Burger"
    assert updated.price == 5.0


def test_delete_menu_item(db_session, menu, people):
    assert catalog.delete_menu_item(db_session, people.admin, menu.lemonade_id).is_ok
    assert db_session.get(MenuItem, menu.lemonade_id) is None
    assert catalog.delete_menu_item(db_session, people.admin, menu.lemonade_id).error.kind == ErrorKind.NOT_FOUND
