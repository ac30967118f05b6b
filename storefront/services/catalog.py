"""
Catalog Service for Storefront
==============================

Categories and menu items: public browsing plus admin-only mutations.

Key Functions:
--------------
- list_categories: Categories sorted by display order, optionally active only
- list_menu_items: Items filtered by category, availability, and featured flag
- get_menu_item: One item with its category
- get_orderable_item: An existing, available item (for the cart)
- create_/update_/delete_category: Admin category management
- create_/update_/delete_menu_item: Admin menu management

Deletion Rules:
---------------
- A category cannot be deleted while any menu item references it; both the
  category and its items are left untouched.
- Deleting a menu item keeps historical order lines: their price and name
  snapshots stay, and their menu item reference is cleared.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..errors import ErrorKind, Result
from ..identity import VerifiedIdentity
from ..models import Category, MenuItem, OrderItem, utcnow
from ..schemas.menu import (
    CategoryCreate,
    CategoryDetailRef,
    CategoryRef,
    CategoryUpdate,
    MenuItemCreate,
    MenuItemDetailOut,
    MenuItemOut,
    MenuItemUpdate,
)
from .helpers import require_admin, to_money


logger = logging.getLogger(__name__)


# =============================================================================
# Serialization
# =============================================================================

def serialize_menu_item(item: MenuItem, category: Optional[Category] = None) -> MenuItemOut:
    """Convert a MenuItem row to its listing form, with the category's id and name."""
    category = category if category is not None else item.category
    return MenuItemOut(
        id=item.id,
        name=item.name,
        description=item.description or "",
        price=item.price,
        category_id=item.category_id,
        image=item.image,
        is_available=item.is_available,
        is_featured=item.is_featured,
        preparation_time=item.preparation_time,
        created_at=item.created_at,
        category=CategoryRef(
            id=item.category_id,
            name=category.name if category is not None else "Unknown",
        ),
    )


def serialize_menu_item_detail(item: MenuItem) -> MenuItemDetailOut:
    category = item.category
    return MenuItemDetailOut(
        **serialize_menu_item(item).model_dump(exclude={"category"}),
        category=CategoryDetailRef(
            id=item.category_id,
            name=category.name if category is not None else "Unknown",
            description=category.description if category is not None else None,
        ),
    )


# =============================================================================
# Public Reads
# =============================================================================

def list_categories(db: Session, active_only: bool = False) -> Result[List[Category]]:
    query = db.query(Category)
    if active_only:
        query = query.filter(Category.is_active.is_(True))
    return Result.ok(query.order_by(Category.display_order.asc(), Category.id.asc()).all())


def list_menu_items(
    db: Session,
    category_id: Optional[int] = None,
    available_only: bool = False,
    featured_only: bool = False,
) -> Result[List[MenuItemOut]]:
    """Menu items matching every filter given, in creation order."""
    query = db.query(MenuItem)
    if category_id is not None:
        query = query.filter(MenuItem.category_id == category_id)
    if available_only:
        query = query.filter(MenuItem.is_available.is_(True))
    if featured_only:
        query = query.filter(MenuItem.is_featured.is_(True))

    items = query.order_by(MenuItem.id.asc()).all()
    return Result.ok([serialize_menu_item(item) for item in items])


def get_menu_item(db: Session, item_id: int) -> Result[MenuItemDetailOut]:
    item = db.get(MenuItem, item_id)
    if item is None:
        return Result.fail(ErrorKind.NOT_FOUND, "Menu item not found", menu_item_id=item_id)
    return Result.ok(serialize_menu_item_detail(item))


def get_orderable_item(db: Session, item_id: int) -> Result[MenuItem]:
    """The menu item row, provided it exists and can be ordered right now."""
    item = db.get(MenuItem, item_id)
    if item is None:
        return Result.fail(ErrorKind.NOT_FOUND, "Menu item not found", menu_item_id=item_id)
    if not item.is_available:
        return Result.fail(
            ErrorKind.VALIDATION,
            f"Menu item not available: {item.name}",
            menu_item_id=item.id,
            menu_item_name=item.name,
        )
    return Result.ok(item)


# =============================================================================
# Category Management (admin)
# =============================================================================

def create_category(
    db: Session,
    identity: Optional[VerifiedIdentity],
    payload: CategoryCreate,
) -> Result[Category]:
    admin = require_admin(db, identity)
    if not admin.is_ok:
        return Result.from_error(admin.error)

    category = Category(
        name=payload.name,
        description=payload.description,
        image=payload.image,
        display_order=payload.display_order,
        is_active=payload.is_active,
    )
    db.add(category)
    db.commit()
    db.refresh(category)
    logger.info("Created category: %s (id=%d)", category.name, category.id)
    return Result.ok(category)


def update_category(
    db: Session,
    identity: Optional[VerifiedIdentity],
    category_id: int,
    payload: CategoryUpdate,
) -> Result[Category]:
    admin = require_admin(db, identity)
    if not admin.is_ok:
        return Result.from_error(admin.error)

    category = db.get(Category, category_id)
    if category is None:
        return Result.fail(ErrorKind.NOT_FOUND, "Category not found", category_id=category_id)

    for field, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(category, field, value)

    db.commit()
    db.refresh(category)
    logger.info("Updated category: %s (id=%d)", category.name, category.id)
    return Result.ok(category)


def delete_category(
    db: Session,
    identity: Optional[VerifiedIdentity],
    category_id: int,
) -> Result[None]:
    admin = require_admin(db, identity)
    if not admin.is_ok:
        return Result.from_error(admin.error)

    category = db.get(Category, category_id)
    if category is None:
        return Result.fail(ErrorKind.NOT_FOUND, "Category not found", category_id=category_id)

    item_count = db.query(MenuItem).filter(MenuItem.category_id == category_id).count()
    if item_count > 0:
        return Result.fail(
            ErrorKind.VALIDATION,
            "Cannot delete category with menu items",
            category_id=category_id,
            menu_item_count=item_count,
        )

    logger.info("Deleting category: %s (id=%d)", category.name, category.id)
    db.delete(category)
    db.commit()
    return Result.ok(None)


# =============================================================================
# Menu Item Management (admin)
# =============================================================================

def create_menu_item(
    db: Session,
    identity: Optional[VerifiedIdentity],
    payload: MenuItemCreate,
) -> Result[MenuItemOut]:
    admin = require_admin(db, identity)
    if not admin.is_ok:
        return Result.from_error(admin.error)

    category = db.get(Category, payload.category_id)
    if category is None:
        return Result.fail(ErrorKind.NOT_FOUND, "Category not found", category_id=payload.category_id)

    item = MenuItem(
        name=payload.name,
        description=payload.description,
        price=to_money(payload.price),
        category_id=category.id,
        image=payload.image,
        is_available=payload.is_available,
        is_featured=payload.is_featured,
        preparation_time=payload.preparation_time,
        created_at=utcnow(),
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    logger.info("Created menu item: %s (id=%d)", item.name, item.id)
    return Result.ok(serialize_menu_item(item))


def update_menu_item(
    db: Session,
    identity: Optional[VerifiedIdentity],
    item_id: int,
    payload: MenuItemUpdate,
) -> Result[MenuItemOut]:
    admin = require_admin(db, identity)
    if not admin.is_ok:
        return Result.from_error(admin.error)

    item = db.get(MenuItem, item_id)
    if item is None:
        return Result.fail(ErrorKind.NOT_FOUND, "Menu item not found", menu_item_id=item_id)

    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "category_id" in changes and db.get(Category, changes["category_id"]) is None:
        return Result.fail(ErrorKind.NOT_FOUND, "Category not found", category_id=changes["category_id"])
    if "price" in changes:
        changes["price"] = to_money(changes["price"])

    for field, value in changes.items():
        setattr(item, field, value)

    db.commit()
    db.refresh(item)
    logger.info("Updated menu item: %s (id=%d)", item.name, item.id)
    return Result.ok(serialize_menu_item(item))


def delete_menu_item(
    db: Session,
    identity: Optional[VerifiedIdentity],
    item_id: int,
) -> Result[None]:
    admin = require_admin(db, identity)
    if not admin.is_ok:
        return Result.from_error(admin.error)

    item = db.get(MenuItem, item_id)
    if item is None:
        return Result.fail(ErrorKind.NOT_FOUND, "Menu item not found", menu_item_id=item_id)

    logger.info("Deleting menu item: %s (id=%d)", item.name, item.id)
    db.query(OrderItem).filter(OrderItem.menu_item_id == item.id).update(
        {OrderItem.menu_item_id: None}, synchronize_session=False
    )
    db.delete(item)
    db.commit()
    return Result.ok(None)
