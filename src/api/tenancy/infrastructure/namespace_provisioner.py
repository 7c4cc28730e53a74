"""PostgreSQL implementation of INamespaceProvisioner.

Applies the ordered structural steps to a tenant namespace. The ledger
makes provisioning idempotent: steps already recorded are skipped, and a
table that exists without a ledger row (e.g. after a manual repair) is
adopted rather than recreated.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import MetaData, Table, insert, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from shared_kernel.namespaces import NamespaceName
from tenancy.infrastructure.observability import (
    DefaultNamespaceProbe,
    NamespaceProbe,
)
from tenancy.infrastructure.structural_migrations import (
    LEDGER_TABLE_NAME,
    STRUCTURAL_MIGRATIONS,
    StructuralMigration,
    bind_to_namespace,
)
from tenancy.ports.exceptions import ProvisioningError
from tenancy.ports.repositories import INamespaceProvisioner

_TABLE_EXISTS = text(
    "SELECT 1 FROM information_schema.tables "
    "WHERE table_schema = :schema AND table_name = :table"
)


class NamespaceProvisioner(INamespaceProvisioner):
    """Creates the tenant tables inside a registered namespace.

    Runs inside the caller's transaction. PostgreSQL DDL is transactional,
    so a failure part-way leaves nothing behind once the caller rolls back.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: NamespaceProbe | None = None,
        migrations: tuple[StructuralMigration, ...] = STRUCTURAL_MIGRATIONS,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultNamespaceProbe()
        self._migrations = migrations

    async def provision(self, namespace: NamespaceName) -> list[str]:
        """Apply every step not yet recorded in the namespace ledger.

        Args:
            namespace: A registered tenant namespace

        Returns:
            Names of the steps applied by this call

        Raises:
            ProvisioningError: If the ledger or any step cannot be applied
        """
        if namespace.is_root:
            raise ProvisioningError(
                "The root namespace is not provisioned with tenant tables",
                namespace.value,
            )

        bound = bind_to_namespace(namespace.value)
        ledger = self._table(bound, namespace, LEDGER_TABLE_NAME)

        try:
            await self._create_table(ledger)
            applied = await self._applied_steps(ledger)
        except SQLAlchemyError as e:
            self._probe.provisioning_failed(namespace.value, LEDGER_TABLE_NAME, e)
            raise ProvisioningError(
                f"Failed to prepare ledger in {namespace}: {e}",
                namespace.value,
                step=LEDGER_TABLE_NAME,
            ) from e

        newly_applied: list[str] = []
        for migration in self._migrations:
            if migration.name in applied:
                self._probe.structural_step_skipped(namespace.value, migration.name)
                continue

            table = self._table(bound, namespace, migration.table.name)
            try:
                await self._create_table(table)
                await self._session.execute(
                    insert(ledger).values(
                        name=migration.name,
                        applied_at=datetime.now(timezone.utc),
                    )
                )
            except SQLAlchemyError as e:
                self._probe.provisioning_failed(namespace.value, migration.name, e)
                raise ProvisioningError(
                    f"Structural step {migration.name} failed in {namespace}: {e}",
                    namespace.value,
                    step=migration.name,
                ) from e

            newly_applied.append(migration.name)
            self._probe.structural_step_applied(namespace.value, migration.name)

        self._probe.namespace_provisioned(namespace.value, len(newly_applied))
        return newly_applied

    async def status(self, namespace: NamespaceName) -> list[tuple[str, datetime | None]]:
        """Report each structural step with the time it was applied.

        Returns:
            ``(step name, applied_at)`` pairs in step order; ``applied_at``
            is None for pending steps
        """
        result = await self._session.execute(
            _TABLE_EXISTS,
            {"schema": namespace.value, "table": LEDGER_TABLE_NAME},
        )
        applied: dict[str, datetime] = {}
        if result.scalar_one_or_none() is not None:
            bound = bind_to_namespace(namespace.value)
            ledger = self._table(bound, namespace, LEDGER_TABLE_NAME)
            rows = await self._session.execute(
                select(ledger.c.name, ledger.c.applied_at)
            )
            applied = {name: applied_at for name, applied_at in rows.all()}

        return [(m.name, applied.get(m.name)) for m in self._migrations]

    async def _applied_steps(self, ledger: Table) -> set[str]:
        result = await self._session.execute(select(ledger.c.name))
        return set(result.scalars().all())

    async def _create_table(self, table: Table) -> None:
        def _create(sync_session: Session) -> None:
            table.create(sync_session.connection(), checkfirst=True)

        await self._session.run_sync(_create)

    @staticmethod
    def _table(bound: MetaData, namespace: NamespaceName, name: str) -> Table:
        return bound.tables[f"{namespace.value}.{name}"]
