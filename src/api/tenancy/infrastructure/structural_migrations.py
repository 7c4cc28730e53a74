"""Ordered structural steps that make up a tenant namespace.

Every tenant namespace holds the same tables. Each step creates one of
them; the ``structural_migrations`` ledger inside the namespace records
which steps have been applied. New steps are appended to the end of
``STRUCTURAL_MIGRATIONS`` and never reordered or renamed, so existing
namespaces pick up only what they are missing.
"""

from __future__ import annotations

from typing import NamedTuple

from sqlalchemy import Column, DateTime, MetaData, String, Table

from audit.infrastructure.models import audit_logs_table
from iam.infrastructure.models import users_table
from infrastructure.database.models import namespace_metadata
from inventory.infrastructure.models import projects_table, units_table

LEDGER_TABLE_NAME = "structural_migrations"

ledger_table = Table(
    LEDGER_TABLE_NAME,
    namespace_metadata,
    Column("name", String(100), primary_key=True),
    Column("applied_at", DateTime(timezone=True), nullable=False),
)


class StructuralMigration(NamedTuple):
    """One step of namespace structure.

    Attributes:
        name: Stable step identifier recorded in the ledger
        table: The schema-less table this step creates
    """

    name: str
    table: Table


STRUCTURAL_MIGRATIONS: tuple[StructuralMigration, ...] = (
    StructuralMigration("0001_create_users", users_table),
    StructuralMigration("0002_create_projects", projects_table),
    StructuralMigration("0003_create_units", units_table),
    StructuralMigration("0004_create_audit_logs", audit_logs_table),
)


def bind_to_namespace(namespace: str) -> MetaData:
    """Copy every namespace table into a metadata collection bound to ``namespace``.

    Foreign keys between namespace tables are retargeted to the same
    schema, so ``units.project_id`` references ``<namespace>.projects``.
    """
    target = MetaData()
    for table in namespace_metadata.sorted_tables:
        table.to_metadata(target, schema=namespace)
    return target
