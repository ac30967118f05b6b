"""
Menu Schemas for Storefront
===========================

This module defines Pydantic models for the catalog: categories and the menu
items grouped under them.

Endpoint Coverage:
------------------
- GET /categories, GET /menu, GET /menu/{id}: Public browsing
- /admin/categories, /admin/menu: Admin CRUD

Category Structure:
-------------------
Categories have a display order (lower sorts first) and an active flag.
Inactive categories are hidden from the storefront's category list but their
items remain orderable while available.

Menu Item Structure:
--------------------
- price: Non-negative amount with two decimal places, at most MAX_MENU_PRICE
- is_available: Unavailable items are listed but cannot be ordered
- is_featured: Highlighted on the storefront home page
- preparation_time: Estimated minutes to prepare (optional)

Usage:
------
    item = MenuItemCreate(
        name="Margherita",
        description="Tomato, mozzarella, basil",
        price=Decimal("11.50"),
        category_id=1,
    )
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


MAX_MENU_PRICE = Decimal("9999.99")


class CategoryOut(BaseModel):
    """Response model for a category."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    image: Optional[str] = None
    display_order: int
    is_active: bool


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    image: Optional[str] = None
    display_order: int = 0
    is_active: bool = True


class CategoryUpdate(BaseModel):
    """
    Request model for updating a category.

    All fields are optional - only provided fields will be updated.
    """
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    image: Optional[str] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None


class CategoryRef(BaseModel):
    """Category summary embedded in menu item listings."""
    id: int
    name: str


class CategoryDetailRef(CategoryRef):
    description: Optional[str] = None


class MenuItemOut(BaseModel):
    """
    Response model for menu item data.

    Attributes:
        id: Database primary key
        name: Display name (e.g., "Margherita")
        description: Short description for the menu card
        price: Current price
        category_id: Owning category
        image: Image URL, if any
        is_available: Whether the item can be ordered right now
        is_featured: Whether the item is highlighted on the home page
        preparation_time: Estimated minutes to prepare
        created_at: When the item was added to the menu
        category: Owning category's id and name ("Unknown" if it was removed)
    """
    id: int
    name: str
    description: str
    price: float
    category_id: int
    image: Optional[str] = None
    is_available: bool
    is_featured: bool
    preparation_time: Optional[int] = None
    created_at: datetime
    category: CategoryRef


class MenuItemDetailOut(MenuItemOut):
    """Single menu item, with the category description included."""
    category: CategoryDetailRef


class MenuItemCreate(BaseModel):
    """
    Request model for creating a new menu item.

    Example:
        {
            "name": "Garlic Bread",
            "description": "Toasted with herb butter",
            "price": 4.50,
            "category_id": 2,
            "is_featured": true
        }
    """
    name: str = Field(min_length=1)
    description: str = ""
    price: Decimal = Field(ge=0, le=MAX_MENU_PRICE)
    category_id: int
    image: Optional[str] = None
    is_available: bool = True
    is_featured: bool = False
    preparation_time: Optional[int] = Field(default=None, ge=0)


class MenuItemUpdate(BaseModel):
    """
    Request model for updating a menu item.

    All fields are optional - only provided fields will be updated.

    Example:
        # Mark an item as sold out
        {"is_available": false}
    """
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0, le=MAX_MENU_PRICE)
    category_id: Optional[int] = None
    image: Optional[str] = None
    is_available: Optional[bool] = None
    is_featured: Optional[bool] = None
    preparation_time: Optional[int] = Field(default=None, ge=0)
