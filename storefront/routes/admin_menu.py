"""
Admin Menu Routes for Storefront
================================

This module contains admin endpoints for managing categories and menu items.

Endpoints:
----------
- GET /admin/categories: List all categories, inactive ones included
- POST /admin/categories: Create a category
- PUT /admin/categories/{id}: Update a category
- DELETE /admin/categories/{id}: Delete an empty category
- GET /admin/menu: List all menu items
- POST /admin/menu: Create a menu item
- PUT /admin/menu/{id}: Update a menu item
- DELETE /admin/menu/{id}: Delete a menu item

Authentication:
---------------
All endpoints require a verified bearer token belonging to an admin.

Updates:
--------
PUT bodies are partial: fields that are omitted or null keep their value.

Deletion:
---------
A category that still holds menu items cannot be deleted (400). Deleting a
menu item keeps past orders intact; their lines keep the name and price.

Usage:
------
    # Take an item off the menu for today
    PUT /admin/menu/7
    {"is_available": false}
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..db import get_db
from ..identity import VerifiedIdentity, get_identity
from ..schemas.menu import (
    CategoryCreate,
    CategoryOut,
    CategoryUpdate,
    MenuItemCreate,
    MenuItemOut,
    MenuItemUpdate,
)
from ..services import catalog
from ..services.helpers import require_admin


logger = logging.getLogger(__name__)

# Router definitions
admin_categories_router = APIRouter(prefix="/admin/categories", tags=["Admin - Menu"])
admin_menu_router = APIRouter(prefix="/admin/menu", tags=["Admin - Menu"])


# =============================================================================
# Category Endpoints
# =============================================================================

@admin_categories_router.get("", response_model=List[CategoryOut])
def admin_categories(
    db: Session = Depends(get_db),
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
) -> List[CategoryOut]:
    require_admin(db, identity).unwrap()
    categories = catalog.list_categories(db, active_only=False).unwrap()
    return [CategoryOut.model_validate(c) for c in categories]


@admin_categories_router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CategoryCreate,
    db: Session = Depends(get_db),
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
) -> CategoryOut:
    category = catalog.create_category(db, identity, payload).unwrap()
    return CategoryOut.model_validate(category)


@admin_categories_router.put("/{category_id}", response_model=CategoryOut)
def update_category(
    category_id: int,
    payload: CategoryUpdate,
    db: Session = Depends(get_db),
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
) -> CategoryOut:
    category = catalog.update_category(db, identity, category_id, payload).unwrap()
    return CategoryOut.model_validate(category)


@admin_categories_router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: int,
    db: Session = Depends(get_db),
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
) -> None:
    catalog.delete_category(db, identity, category_id).unwrap()
    return None


# =============================================================================
# Menu Item Endpoints
# =============================================================================

@admin_menu_router.get("", response_model=List[MenuItemOut])
def admin_menu(
    db: Session = Depends(get_db),
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
) -> List[MenuItemOut]:
    """List every menu item, unavailable ones included."""
    require_admin(db, identity).unwrap()
    return catalog.list_menu_items(db).unwrap()


@admin_menu_router.post("", response_model=MenuItemOut, status_code=status.HTTP_201_CREATED)
def create_menu_item(
    payload: MenuItemCreate,
    db: Session = Depends(get_db),
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
) -> MenuItemOut:
    return catalog.create_menu_item(db, identity, payload).unwrap()


@admin_menu_router.put("/{item_id}", response_model=MenuItemOut)
def update_menu_item(
    item_id: int,
    payload: MenuItemUpdate,
    db: Session = Depends(get_db),
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
) -> MenuItemOut:
    return catalog.update_menu_item(db, identity, item_id, payload).unwrap()


@admin_menu_router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_menu_item(
    item_id: int,
    db: Session = Depends(get_db),
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
) -> None:
    catalog.delete_menu_item(db, identity, item_id).unwrap()
    return None
