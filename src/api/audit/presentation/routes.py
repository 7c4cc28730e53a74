"""HTTP routes for reading the caller's tenant audit trail."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from audit.application.audit_log_service import AuditLogService
from audit.dependencies import get_audit_log_service
from audit.domain.audit_entry import AuditAction, AuditFilter
from audit.domain.exceptions import AuditEntryNotFoundError
from audit.presentation.models import AuditLogListResponse, AuditLogResponse
from iam.dependencies.authorization import require_permission
from iam.domain.value_objects import Action, Resource
from shared_kernel.middleware import RequestContext

router = APIRouter(
    prefix="/audit-logs",
    tags=["audit-logs"],
)


@router.get("")
async def list_audit_logs(
    _: Annotated[
        RequestContext,
        Depends(require_permission(Resource.AUDIT_LOGS, Action.READ)),
    ],
    service: Annotated[AuditLogService, Depends(get_audit_log_service)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
    user_id: int | None = None,
    action: AuditAction | None = None,
    entity: str | None = None,
    entity_id: int | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
) -> AuditLogListResponse:
    """List audit entries, newest first."""
    criteria = AuditFilter(
        user_id=user_id,
        action=action,
        entity=entity,
        entity_id=entity_id,
        start_date=start_date,
        end_date=end_date,
    )
    entries, total = await service.list_entries(criteria, page=page, limit=limit)
    return AuditLogListResponse(
        audit_logs=[AuditLogResponse.from_domain(e) for e in entries],
        total=total,
        page=page,
        limit=limit,
    )


@router.get("/{entry_id}")
async def get_audit_log(
    entry_id: int,
    _: Annotated[
        RequestContext,
        Depends(require_permission(Resource.AUDIT_LOGS, Action.READ)),
    ],
    service: Annotated[AuditLogService, Depends(get_audit_log_service)],
) -> AuditLogResponse:
    try:
        entry = await service.get_entry(entry_id)
    except AuditEntryNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return AuditLogResponse.from_domain(entry)
