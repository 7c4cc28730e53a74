"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import APIRouter, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from audit import presentation as audit_presentation
from iam import presentation as iam_presentation
from infrastructure.database.dependencies import (
    close_database_connections,
    get_session,
)
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe
from infrastructure.settings import get_settings
from infrastructure.version import __version__
from inventory import presentation as inventory_presentation
from tenancy import presentation as tenancy_presentation

API_PREFIX = "/api/v1"


@asynccontextmanager
async def housingram_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Engine disposal on shutdown (the engine is created lazily)
    """
    settings = get_settings()
    configure_logging(debug=settings.debug)
    probe = DefaultStartupProbe()
    probe.application_started(settings.app_name, __version__)

    yield

    try:
        await close_database_connections()
    except SQLAlchemyError as e:
        probe.shutdown_cleanup_failed(e)
    probe.application_stopped(settings.app_name)


app = FastAPI(
    title="Housingram API",
    description="Multi-tenant property management with per-tenant namespaces",
    version=__version__,
    lifespan=housingram_lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

api_router = APIRouter(prefix=API_PREFIX)
api_router.include_router(iam_presentation.router)
api_router.include_router(tenancy_presentation.router)
api_router.include_router(inventory_presentation.router)
api_router.include_router(audit_presentation.router)
app.include_router(api_router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok", "version": __version__}


@app.get("/health/db")
async def health_db(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> dict:
    """Check database connection health."""
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        return {"status": "error", "connected": False, "error": str(e)}
    return {"status": "ok", "connected": True}
