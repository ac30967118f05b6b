"""
Admin Analytics Routes for Storefront
=====================================

This module contains admin endpoints for the dashboard and the customer
list, plus promotion of customers to admin.

Endpoints:
----------
- GET /admin/stats: Dashboard figures
- GET /admin/customers: Every user with order count and lifetime spend
- POST /admin/users/{id}/promote: Grant admin rights to a user

Authentication:
---------------
All endpoints require a verified bearer token belonging to an admin.

Dashboard Metrics:
------------------
- Order counts: total, pending, today, and by status (all six present)
- Revenue: total and today, summed over every order including cancelled
- Menu: total items, available items, and their ratio
- Customers: every user record

"Today" starts at midnight in STORE_TIMEZONE. Figures are recomputed on
every request.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..identity import VerifiedIdentity, get_identity
from ..schemas.analytics import CustomerStatsOut, DashboardStats
from ..schemas.users import UserOut
from ..services import analytics, users


logger = logging.getLogger(__name__)

# Router definition
admin_analytics_router = APIRouter(prefix="/admin", tags=["Admin - Analytics"])


@admin_analytics_router.get("/stats", response_model=DashboardStats)
def get_stats(
    db: Session = Depends(get_db),
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
) -> DashboardStats:
    return analytics.get_admin_stats(db, identity).unwrap()


@admin_analytics_router.get("/customers", response_model=List[CustomerStatsOut])
def list_customers(
    db: Session = Depends(get_db),
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
) -> List[CustomerStatsOut]:
    return analytics.get_all_customers(db, identity).unwrap()


@admin_analytics_router.post("/users/{user_id}/promote", response_model=UserOut)
def promote_user(
    user_id: int,
    db: Session = Depends(get_db),
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
) -> UserOut:
    user = users.promote_user(db, identity, user_id).unwrap()
    return UserOut.model_validate(user)
