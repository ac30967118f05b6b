"""
Identity Boundary for Storefront
================================

This module is the only place where identity-provider claims enter the
application. A bearer token from the ``Authorization`` header is verified
(signature, expiry, and audience/issuer when configured) and turned into a
``VerifiedIdentity``. Services accept ``VerifiedIdentity`` and nothing else,
so an unverified claim can never reach the user directory or order logic.

Token Requirements:
-------------------
- Signed with IDENTITY_JWT_KEY using one of IDENTITY_JWT_ALGORITHMS
- ``sub`` claim: the provider's stable subject identifier (required)
- ``email``, ``name``, ``given_name``, ``nickname``: optional profile claims

Request Handling:
-----------------
- No Authorization header: the dependency yields ``None``; services decide
  whether anonymous access is acceptable.
- Invalid, expired, or subject-less token: 401 with WWW-Authenticate: Bearer.
- Verification key not configured: 503, so a misconfigured deployment never
  accepts tokens it cannot check.

Usage:
------
    from storefront.identity import VerifiedIdentity, get_identity

    @router.get("/orders")
    def list_orders(identity: Optional[VerifiedIdentity] = Depends(get_identity)):
        ...
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from . import config


logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class VerifiedIdentity:
    """Claims taken from a token whose signature has been verified."""
    subject: str
    email: Optional[str] = None
    name: Optional[str] = None
    given_name: Optional[str] = None
    nickname: Optional[str] = None

    def display_name(self, default: str) -> str:
        return self.name or self.given_name or self.nickname or default


class IdentityNotConfigured(Exception):
    """Raised when no verification key is configured."""


class InvalidIdentityToken(Exception):
    """Raised when a token fails verification."""


def verify_identity_token(token: str) -> VerifiedIdentity:
    """
    Verify an identity-provider token and return its claims.

    Raises:
        IdentityNotConfigured: IDENTITY_JWT_KEY is empty.
        InvalidIdentityToken: Bad signature, expired, wrong audience/issuer,
            or missing subject.
    """
    if not config.IDENTITY_JWT_KEY:
        raise IdentityNotConfigured("IDENTITY_JWT_KEY is not set")

    kwargs: Dict[str, Any] = {
        "algorithms": config.IDENTITY_JWT_ALGORITHMS,
        "options": {"verify_aud": bool(config.IDENTITY_AUDIENCE)},
    }
    if config.IDENTITY_AUDIENCE:
        kwargs["audience"] = config.IDENTITY_AUDIENCE
    if config.IDENTITY_ISSUER:
        kwargs["issuer"] = config.IDENTITY_ISSUER

    try:
        claims = jwt.decode(token, config.IDENTITY_JWT_KEY, **kwargs)
    except JWTError as exc:
        raise InvalidIdentityToken(str(exc)) from exc

    subject = claims.get("sub")
    if not subject:
        raise InvalidIdentityToken("Token has no subject")

    return VerifiedIdentity(
        subject=str(subject),
        email=claims.get("email"),
        name=claims.get("name"),
        given_name=claims.get("given_name"),
        nickname=claims.get("nickname"),
    )


def get_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[VerifiedIdentity]:
    """
    FastAPI dependency yielding the caller's verified identity, or None.

    A request without credentials is anonymous. A request with credentials
    that fail verification is rejected outright.
    """
    if credentials is None:
        return None

    try:
        return verify_identity_token(credentials.credentials)
    except IdentityNotConfigured:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Identity verification not configured. Set IDENTITY_JWT_KEY environment variable.",
        )
    except InvalidIdentityToken as exc:
        logger.warning("Rejected identity token: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid identity token",
            headers={"WWW-Authenticate": "Bearer"},
        )
