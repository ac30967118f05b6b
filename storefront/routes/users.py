"""
User Routes for Storefront
==========================

Endpoints for the signed-in customer's own record. All of them read the
caller from the verified bearer token.

Endpoints:
----------
- POST /users/me/ensure: Create the record on first sign-in
- POST /users/me/sync: Create or refresh email and name from the token
- GET /users/me: The caller's record (null before first sign-in)
- PUT /users/me/profile: Replace default phone and address
- GET /users/me/is-admin: Whether the caller may use the admin console
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..identity import VerifiedIdentity, get_identity
from ..schemas.users import AdminFlagOut, EnsureUserOut, ProfileUpdate, UserOut
from ..services import users


logger = logging.getLogger(__name__)

# Router definition
users_router = APIRouter(prefix="/users/me", tags=["Users"])


@users_router.post("/ensure", response_model=EnsureUserOut)
def ensure_user(
    db: Session = Depends(get_db),
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
) -> EnsureUserOut:
    return users.ensure_user(db, identity).unwrap()


@users_router.post("/sync", response_model=UserOut)
def sync_user(
    db: Session = Depends(get_db),
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
) -> UserOut:
    return UserOut.model_validate(users.sync_user(db, identity).unwrap())


@users_router.get("", response_model=Optional[UserOut])
def get_me(
    db: Session = Depends(get_db),
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
) -> Optional[UserOut]:
    user = users.get_current_user(db, identity).unwrap()
    return UserOut.model_validate(user) if user is not None else None


@users_router.put("/profile", response_model=UserOut)
def update_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
) -> UserOut:
    user = users.update_profile(db, identity, phone=payload.phone, address=payload.address).unwrap()
    return UserOut.model_validate(user)


@users_router.get("/is-admin", response_model=AdminFlagOut)
def is_admin(
    db: Session = Depends(get_db),
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
) -> AdminFlagOut:
    return AdminFlagOut(is_admin=users.is_user_admin(db, identity).unwrap())
