"""Tenancy presentation layer: platform administrator endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from tenancy.presentation import routes

router = APIRouter(
    prefix="/super-admin",
    tags=["super-admin"],
)

router.include_router(routes.router)

__all__ = ["router"]
