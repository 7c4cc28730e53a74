"""Inventory presentation layer: projects and their units."""

from __future__ import annotations

from fastapi import APIRouter

from inventory.presentation import projects, units

router = APIRouter()

router.include_router(projects.router)
router.include_router(units.router)

__all__ = ["router"]
