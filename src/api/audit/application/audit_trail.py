"""Recording tenant mutations in the namespace audit trail.

Each entry is written inside a SAVEPOINT of the caller's transaction. If
the write fails, only the savepoint is rolled back: the mutation being
audited still commits and the failure is reported through the probe.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from audit.application.observability import AuditProbe, DefaultAuditProbe
from audit.domain.audit_entry import AuditAction, AuditActor, AuditEntry, snapshot
from audit.ports.repositories import IAuditLogRepository
from infrastructure.database.scoping import ScopedSession


class AuditTrail:
    """Audit trail of one namespace, bound to the acting principal."""

    def __init__(
        self,
        repository: IAuditLogRepository,
        session: ScopedSession,
        actor: AuditActor,
        probe: AuditProbe | None = None,
    ):
        self._repository = repository
        self._session = session
        self._actor = actor
        self._probe = probe or DefaultAuditProbe()

    async def record(
        self,
        action: AuditAction,
        entity: str,
        entity_id: int | None,
        old_values: dict[str, Any] | None = None,
        new_values: dict[str, Any] | None = None,
    ) -> AuditEntry | None:
        """Append an entry; must be called inside an open transaction.

        Returns:
            The stored entry, or None if writing it failed
        """
        entry = AuditEntry(
            action=action,
            entity=entity,
            entity_id=entity_id,
            user_id=self._actor.user_id,
            user_name=self._actor.user_name,
            old_values=snapshot(old_values),
            new_values=snapshot(new_values),
            ip_address=self._actor.ip_address,
            user_agent=self._actor.user_agent,
        )
        namespace = self._session.namespace.value
        try:
            async with self._session.begin_nested():
                stored = await self._repository.add(entry)
        except SQLAlchemyError as e:
            self._probe.entry_failed(namespace, action.value, entity, e)
            return None

        self._probe.entry_recorded(namespace, action.value, entity)
        return stored
