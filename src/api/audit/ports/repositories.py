"""Repository port for audit entries."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from audit.domain.audit_entry import AuditEntry, AuditFilter


@runtime_checkable
class IAuditLogRepository(Protocol):
    """Append-only store of the audit entries of one tenant namespace."""

    async def add(self, entry: AuditEntry) -> AuditEntry:
        """Append an entry and return it with id and timestamp."""
        ...

    async def get_by_id(self, entry_id: int) -> AuditEntry | None:
        ...

    async def list(
        self,
        criteria: AuditFilter,
        *,
        limit: int = 20,
        offset: int = 0,
    ) -> list[AuditEntry]:
        """List matching entries, newest first."""
        ...

    async def count(self, criteria: AuditFilter) -> int:
        ...
