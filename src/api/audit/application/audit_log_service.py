"""Read access to a namespace's audit trail."""

from __future__ import annotations

from audit.domain.audit_entry import AuditEntry, AuditFilter
from audit.domain.exceptions import AuditEntryNotFoundError
from audit.ports.repositories import IAuditLogRepository


class AuditLogService:
    """Lists and retrieves audit entries of the request's namespace."""

    def __init__(self, repository: IAuditLogRepository):
        self._repository = repository

    async def list_entries(
        self,
        criteria: AuditFilter,
        *,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[AuditEntry], int]:
        entries = await self._repository.list(
            criteria, limit=limit, offset=(page - 1) * limit
        )
        total = await self._repository.count(criteria)
        return entries, total

    async def get_entry(self, entry_id: int) -> AuditEntry:
        """Retrieve one entry.

        Raises:
            AuditEntryNotFoundError: If the entry does not exist
        """
        entry = await self._repository.get_by_id(entry_id)
        if entry is None:
            raise AuditEntryNotFoundError(f"Audit log {entry_id} not found")
        return entry
