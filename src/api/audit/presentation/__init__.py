"""Audit presentation layer."""

from audit.presentation.routes import router

__all__ = ["router"]
