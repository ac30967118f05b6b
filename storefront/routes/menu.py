"""
Public Menu Routes for Storefront
=================================

Catalog browsing for customers. No authentication required.

Endpoints:
----------
- GET /categories: Categories by display order
- GET /menu: Menu items, optionally filtered
- GET /menu/{id}: One menu item with its category

Filtering:
----------
Filters on GET /menu combine:
- ?category_id=3 - Only items in category 3
- ?available_only=true - Hide items that cannot be ordered right now
- ?featured_only=true - Only items highlighted on the home page

Usage:
------
    GET /menu?category_id=2&available_only=true
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas.menu import CategoryOut, MenuItemDetailOut, MenuItemOut
from ..services import catalog


logger = logging.getLogger(__name__)

# Router definitions
public_categories_router = APIRouter(prefix="/categories", tags=["Menu"])
public_menu_router = APIRouter(prefix="/menu", tags=["Menu"])


@public_categories_router.get("", response_model=List[CategoryOut])
def list_categories(
    db: Session = Depends(get_db),
    active_only: bool = Query(True, description="Hide inactive categories"),
) -> List[CategoryOut]:
    categories = catalog.list_categories(db, active_only=active_only).unwrap()
    return [CategoryOut.model_validate(c) for c in categories]


@public_menu_router.get("", response_model=List[MenuItemOut])
def list_menu(
    db: Session = Depends(get_db),
    category_id: Optional[int] = Query(None),
    available_only: bool = Query(False),
    featured_only: bool = Query(False),
) -> List[MenuItemOut]:
    """Return menu items matching every filter given."""
    return catalog.list_menu_items(
        db,
        category_id=category_id,
        available_only=available_only,
        featured_only=featured_only,
    ).unwrap()


@public_menu_router.get("/{item_id}", response_model=MenuItemDetailOut)
def get_menu_item(item_id: int, db: Session = Depends(get_db)) -> MenuItemDetailOut:
    return catalog.get_menu_item(db, item_id).unwrap()
