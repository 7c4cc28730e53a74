"""Response models for audit log endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from audit.domain.audit_entry import AuditEntry


class AuditLogResponse(BaseModel):
    id: int
    action: str
    entity: str
    entity_id: int | None
    user_id: int | None
    user_name: str | None
    old_values: dict[str, Any] | None
    new_values: dict[str, Any] | None
    ip_address: str | None
    user_agent: str | None
    created_at: datetime | None

    @classmethod
    def from_domain(cls, entry: AuditEntry) -> AuditLogResponse:
        return cls(
            id=entry.id,
            action=entry.action.value,
            entity=entry.entity,
            entity_id=entry.entity_id,
            user_id=entry.user_id,
            user_name=entry.user_name,
            old_values=entry.old_values,
            new_values=entry.new_values,
            ip_address=entry.ip_address,
            user_agent=entry.user_agent,
            created_at=entry.created_at,
        )


class AuditLogListResponse(BaseModel):
    audit_logs: list[AuditLogResponse]
    total: int
    page: int
    limit: int
