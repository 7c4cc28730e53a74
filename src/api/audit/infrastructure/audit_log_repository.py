"""Namespace-scoped implementation of IAuditLogRepository."""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, insert, select
from sqlalchemy.engine import RowMapping

from audit.domain.audit_entry import AuditAction, AuditEntry, AuditFilter
from audit.infrastructure.models import audit_logs_table
from audit.ports.repositories import IAuditLogRepository
from infrastructure.database.scoping import ScopedSession


class AuditLogRepository(IAuditLogRepository):
    """Audit entries of the namespace bound to the given ScopedSession."""

    def __init__(self, session: ScopedSession) -> None:
        self._session = session

    async def add(self, entry: AuditEntry) -> AuditEntry:
        stmt = (
            insert(audit_logs_table)
            .values(
                user_id=entry.user_id,
                user_name=entry.user_name,
                action=entry.action.value,
                entity=entry.entity,
                entity_id=entry.entity_id,
                old_values=entry.old_values,
                new_values=entry.new_values,
                ip_address=entry.ip_address,
                user_agent=entry.user_agent,
            )
            .returning(audit_logs_table)
        )
        result = await self._session.execute(stmt)
        return self._to_domain(result.mappings().one())

    async def get_by_id(self, entry_id: int) -> AuditEntry | None:
        stmt = select(audit_logs_table).where(audit_logs_table.c.id == entry_id)
        result = await self._session.execute(stmt)
        row = result.mappings().one_or_none()
        return self._to_domain(row) if row is not None else None

    async def list(
        self,
        criteria: AuditFilter,
        *,
        limit: int = 20,
        offset: int = 0,
    ) -> list[AuditEntry]:
        stmt = self._filtered(select(audit_logs_table), criteria)
        stmt = (
            stmt.order_by(
                audit_logs_table.c.created_at.desc(), audit_logs_table.c.id.desc()
            )
            .limit(limit)
            .offset(offset)
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(row) for row in result.mappings().all()]

    async def count(self, criteria: AuditFilter) -> int:
        stmt = self._filtered(
            select(func.count()).select_from(audit_logs_table), criteria
        )
        return int(await self._session.scalar(stmt) or 0)

    @staticmethod
    def _filtered(stmt: Any, criteria: AuditFilter) -> Any:
        columns = audit_logs_table.c
        if criteria.user_id is not None:
            stmt = stmt.where(columns.user_id == criteria.user_id)
        if criteria.action is not None:
            stmt = stmt.where(columns.action == criteria.action.value)
        if criteria.entity is not None:
            stmt = stmt.where(columns.entity == criteria.entity)
        if criteria.entity_id is not None:
            stmt = stmt.where(columns.entity_id == criteria.entity_id)
        if criteria.start_date is not None:
            stmt = stmt.where(columns.created_at >= criteria.start_date)
        if criteria.end_date is not None:
            stmt = stmt.where(columns.created_at <= criteria.end_date)
        return stmt

    @staticmethod
    def _to_domain(row: RowMapping) -> AuditEntry:
        return AuditEntry(
            id=row["id"],
            user_id=row["user_id"],
            user_name=row["user_name"],
            action=AuditAction(row["action"]),
            entity=row["entity"],
            entity_id=row["entity_id"],
            old_values=row["old_values"],
            new_values=row["new_values"],
            ip_address=row["ip_address"],
            user_agent=row["user_agent"],
            created_at=row["created_at"],
        )
