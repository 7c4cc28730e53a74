"""Wiring of the audit trail for tenant requests."""

from typing import Annotated

from fastapi import Depends, Request

from audit.application.audit_log_service import AuditLogService
from audit.application.audit_trail import AuditTrail
from audit.domain.audit_entry import AuditActor
from audit.infrastructure.audit_log_repository import AuditLogRepository
from infrastructure.database.scoping import ScopedSession
from shared_kernel.middleware import RequestContext
from tenancy.dependencies.request_context import (
    get_request_context,
    get_scoped_session,
)


def _client_ip(request: Request) -> str | None:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()[:45]
    return request.client.host if request.client else None


def get_audit_log_repository(
    session: Annotated[ScopedSession, Depends(get_scoped_session)],
) -> AuditLogRepository:
    return AuditLogRepository(session=session)


def get_audit_actor(
    request: Request,
    context: Annotated[RequestContext, Depends(get_request_context)],
) -> AuditActor:
    return AuditActor(
        user_id=context.principal_id,
        user_name=context.login,
        ip_address=_client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )


def get_audit_trail(
    session: Annotated[ScopedSession, Depends(get_scoped_session)],
    repository: Annotated[AuditLogRepository, Depends(get_audit_log_repository)],
    actor: Annotated[AuditActor, Depends(get_audit_actor)],
) -> AuditTrail:
    return AuditTrail(repository=repository, session=session, actor=actor)


def get_audit_log_service(
    repository: Annotated[AuditLogRepository, Depends(get_audit_log_repository)],
) -> AuditLogService:
    return AuditLogService(repository=repository)
