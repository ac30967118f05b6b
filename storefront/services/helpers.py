"""
Helper Functions for Storefront
===============================

Shared lookups and conversions used by the service modules.

Key Functions:
--------------
- find_user: Look up a user record by identity-provider subject
- resolve_user: The caller's record, or Unauthenticated / NotFound
- require_admin: The caller's record if it carries the admin flag
- to_money: Round an amount to two decimal places
- as_utc: Attach UTC to naive datetimes read back from SQLite

Authorization:
--------------
An administrator is a user record with ``is_admin`` set. A verified identity
with no user record is never an administrator.
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

from sqlalchemy.orm import Session

from ..errors import ErrorKind, Result
from ..identity import VerifiedIdentity
from ..models import User


logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def find_user(db: Session, external_id: str) -> Optional[User]:
    """Return the user record for an identity-provider subject, if any."""
    return db.query(User).filter(User.external_id == external_id).one_or_none()


def resolve_user(db: Session, identity: Optional[VerifiedIdentity]) -> Result[User]:
    """
    Resolve the caller to their user record.

    Returns:
        Result holding the User, or UNAUTHENTICATED when there is no
        identity, or NOT_FOUND when the identity has no record yet.
    """
    if identity is None:
        return Result.fail(ErrorKind.UNAUTHENTICATED, "Unauthorized")

    user = find_user(db, identity.subject)
    if user is None:
        return Result.fail(ErrorKind.NOT_FOUND, "User not found", external_id=identity.subject)
    return Result.ok(user)


def require_admin(db: Session, identity: Optional[VerifiedIdentity]) -> Result[User]:
    """Resolve the caller and check the admin flag."""
    if identity is None:
        return Result.fail(ErrorKind.UNAUTHENTICATED, "Unauthorized")

    user = find_user(db, identity.subject)
    if user is None or not user.is_admin:
        return Result.fail(
            ErrorKind.FORBIDDEN,
            "Unauthorized: Admin access required",
            external_id=identity.subject,
        )
    return Result.ok(user)


def to_money(value: Union[Decimal, int, float, str]) -> Decimal:
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back out; stored values are always UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
