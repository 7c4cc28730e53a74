"""IAM presentation layer - aggregate-based organization.

Authentication endpoints and tenant user management each live in their
own package with their own routes and models.
"""

from __future__ import annotations

from fastapi import APIRouter

from iam.presentation import auth, users

router = APIRouter()

router.include_router(auth.router)
router.include_router(users.router)

__all__ = ["router"]
