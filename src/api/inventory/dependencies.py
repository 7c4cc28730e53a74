"""Wiring of inventory repositories and services."""

from typing import Annotated

from fastapi import Depends

from audit.application.audit_trail import AuditTrail
from audit.dependencies import get_audit_trail
from infrastructure.database.scoping import ScopedSession
from inventory.application.services import ProjectService, UnitService
from inventory.infrastructure.project_repository import ProjectRepository
from inventory.infrastructure.unit_repository import UnitRepository
from tenancy.dependencies.request_context import get_scoped_session


def get_project_repository(
    session: Annotated[ScopedSession, Depends(get_scoped_session)],
) -> ProjectRepository:
    return ProjectRepository(session=session)


def get_unit_repository(
    session: Annotated[ScopedSession, Depends(get_scoped_session)],
) -> UnitRepository:
    return UnitRepository(session=session)


def get_project_service(
    session: Annotated[ScopedSession, Depends(get_scoped_session)],
    projects: Annotated[ProjectRepository, Depends(get_project_repository)],
    audit_trail: Annotated[AuditTrail, Depends(get_audit_trail)],
) -> ProjectService:
    return ProjectService(
        project_repository=projects, audit_trail=audit_trail, session=session
    )


def get_unit_service(
    session: Annotated[ScopedSession, Depends(get_scoped_session)],
    units: Annotated[UnitRepository, Depends(get_unit_repository)],
    projects: Annotated[ProjectRepository, Depends(get_project_repository)],
    audit_trail: Annotated[AuditTrail, Depends(get_audit_trail)],
) -> UnitService:
    return UnitService(
        unit_repository=units,
        project_repository=projects,
        audit_trail=audit_trail,
        session=session,
    )
