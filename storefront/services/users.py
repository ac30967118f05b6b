"""
User Directory Service for Storefront
=====================================

Maps verified identities from the identity provider onto internal user
records, and exposes the operator operations used to grant admin rights.

Key Functions:
--------------
- ensure_user: Create the caller's record on first sign-in
- sync_user: Create or refresh email/name from the identity's claims
- get_current_user / is_user_admin: Read the caller's record
- update_profile: Store default phone and address for checkout
- promote_user: Admin-gated promotion of another user

Operator Functions (trusted context, no identity):
--------------------------------------------------
- mark_user_as_admin: Promote by identity-provider subject
- make_admin_by_email: Promote by email address
- sync_external_user: Create or update a record for a known subject
- list_all_users: Every user record

Records are never deleted.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.orm import Session

from ..errors import ErrorKind, Result
from ..identity import VerifiedIdentity
from ..models import User, utcnow
from ..schemas.users import EnsureUserOut
from .helpers import find_user, require_admin, resolve_user


logger = logging.getLogger(__name__)


@dataclass
class AdminGrant:
    """Outcome of an operator promotion."""
    user: User
    already_admin: bool


@dataclass
class UserSync:
    """Outcome of an operator sync."""
    user: User
    created: bool


# =============================================================================
# Caller Operations
# =============================================================================

def ensure_user(db: Session, identity: Optional[VerifiedIdentity]) -> Result[EnsureUserOut]:
    """
    Make sure the signed-in caller has a user record.

    New records take their name from the first of the ``name``,
    ``given_name`` and ``nickname`` claims, falling back to "User".
    """
    if identity is None:
        return Result.fail(ErrorKind.UNAUTHENTICATED, "Unauthorized")

    existing = find_user(db, identity.subject)
    if existing is not None:
        return Result.ok(EnsureUserOut(user_id=existing.id, is_new=False, is_admin=existing.is_admin))

    user = User(
        external_id=identity.subject,
        email=identity.email or "",
        name=identity.display_name("User"),
        is_admin=False,
        created_at=utcnow(),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created user record id=%d on first sign-in", user.id)
    return Result.ok(EnsureUserOut(user_id=user.id, is_new=True, is_admin=False))


def sync_user(db: Session, identity: Optional[VerifiedIdentity]) -> Result[User]:
    """Create the caller's record, or refresh its email and name from the claims."""
    if identity is None:
        return Result.fail(ErrorKind.UNAUTHENTICATED, "Unauthorized")

    user = find_user(db, identity.subject)
    if user is None:
        user = User(
            external_id=identity.subject,
            email=identity.email or "",
            name=identity.display_name("User"),
            is_admin=False,
            created_at=utcnow(),
        )
        db.add(user)
        logger.info("Created user record for subject on sync")
    else:
        if identity.email is not None:
            user.email = identity.email
        user.name = identity.display_name(user.name)

    db.commit()
    db.refresh(user)
    return Result.ok(user)


def get_current_user(db: Session, identity: Optional[VerifiedIdentity]) -> Result[Optional[User]]:
    """The caller's record, or None when anonymous or not yet created."""
    if identity is None:
        return Result.ok(None)
    return Result.ok(find_user(db, identity.subject))


def is_user_admin(db: Session, identity: Optional[VerifiedIdentity]) -> Result[bool]:
    if identity is None:
        return Result.ok(False)
    user = find_user(db, identity.subject)
    return Result.ok(bool(user and user.is_admin))


def update_profile(
    db: Session,
    identity: Optional[VerifiedIdentity],
    phone: Optional[str],
    address: Optional[str],
) -> Result[User]:
    """Replace the caller's default phone and address."""
    resolved = resolve_user(db, identity)
    if not resolved.is_ok:
        return resolved

    user = resolved.value
    user.phone = phone
    user.address = address
    db.commit()
    db.refresh(user)
    logger.info("Updated profile for user id=%d", user.id)
    return Result.ok(user)


def promote_user(db: Session, identity: Optional[VerifiedIdentity], user_id: int) -> Result[User]:
    """Grant admin rights to another user. Admin only."""
    admin = require_admin(db, identity)
    if not admin.is_ok:
        return admin

    user = db.get(User, user_id)
    if user is None:
        return Result.fail(ErrorKind.NOT_FOUND, "User not found", user_id=user_id)

    if not user.is_admin:
        user.is_admin = True
        db.commit()
        db.refresh(user)
        logger.info("User id=%d promoted to admin by user id=%d", user.id, admin.value.id)
    return Result.ok(user)


# =============================================================================
# Operator Operations
# =============================================================================

def mark_user_as_admin(db: Session, external_id: str) -> Result[AdminGrant]:
    user = find_user(db, external_id)
    if user is None:
        return Result.fail(ErrorKind.NOT_FOUND, "User not found", external_id=external_id)
    return Result.ok(_grant_admin(db, user))


def make_admin_by_email(db: Session, email: str) -> Result[AdminGrant]:
    user = db.query(User).filter(User.email == email).order_by(User.id.asc()).first()
    if user is None:
        return Result.fail(ErrorKind.NOT_FOUND, f"User not found with email: {email}", email=email)
    return Result.ok(_grant_admin(db, user))


def sync_external_user(
    db: Session,
    external_id: str,
    email: str,
    name: str,
    make_admin: bool = False,
) -> Result[UserSync]:
    """
    Create a record for a subject that has not signed in yet.

    Existing records are left as they are, except that ``make_admin``
    promotes them.
    """
    user = find_user(db, external_id)
    if user is not None:
        if make_admin and not user.is_admin:
            _grant_admin(db, user)
        return Result.ok(UserSync(user=user, created=False))

    user = User(
        external_id=external_id,
        email=email,
        name=name,
        is_admin=make_admin,
        created_at=utcnow(),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Synced new user id=%d (admin=%s)", user.id, make_admin)
    return Result.ok(UserSync(user=user, created=True))


def list_all_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.id.asc()).all()


def _grant_admin(db: Session, user: User) -> AdminGrant:
    if user.is_admin:
        return AdminGrant(user=user, already_admin=True)
    user.is_admin = True
    db.commit()
    db.refresh(user)
    logger.info("User id=%d promoted to admin", user.id)
    return AdminGrant(user=user, already_admin=False)
