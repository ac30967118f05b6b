"""
User Schemas for Storefront
===========================

Pydantic models for the user directory: the signed-in customer's own record,
profile updates, and sign-in synchronisation results.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class UserOut(BaseModel):
    """
    Response model for a user record.

    Attributes:
        id: Database primary key
        external_id: Identity-provider subject
        email: Email from the identity provider (may be empty)
        name: Display name
        phone: Default phone for checkout
        address: Default delivery address for checkout
        is_admin: Whether the user may manage the catalog and orders
        created_at: When the record was created
    """
    model_config = ConfigDict(from_attributes=True)

    id: int
    external_id: str
    email: str
    name: str
    phone: Optional[str] = None
    address: Optional[str] = None
    is_admin: bool
    created_at: datetime


class EnsureUserOut(BaseModel):
    """Result of the sign-in check that creates a record on first visit."""
    user_id: int
    is_new: bool
    is_admin: bool


class ProfileUpdate(BaseModel):
    """Replaces the stored phone and address; omitted fields are cleared."""
    phone: Optional[str] = None
    address: Optional[str] = None


class AdminFlagOut(BaseModel):
    is_admin: bool
