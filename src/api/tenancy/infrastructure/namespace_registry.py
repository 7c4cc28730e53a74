"""PostgreSQL implementation of INamespaceRegistry.

Each tenant namespace is a PostgreSQL schema. The catalog itself is the
registry: a namespace is registered exactly when its schema exists, so
there is no second source of truth to drift. Schema DDL is transactional
in PostgreSQL, which lets onboarding roll a half-created namespace back
together with the tenant record.
"""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.schema import CreateSchema, DropSchema

from shared_kernel.namespaces import NAMESPACE_PREFIX, NamespaceName
from tenancy.infrastructure.observability import (
    DefaultNamespaceProbe,
    NamespaceProbe,
)
from tenancy.ports.exceptions import ProvisioningError
from tenancy.ports.repositories import INamespaceRegistry

_SCHEMA_EXISTS = text(
    "SELECT 1 FROM information_schema.schemata WHERE schema_name = :name"
)
_LIST_SCHEMAS = text(
    "SELECT schema_name FROM information_schema.schemata "
    "WHERE schema_name LIKE :pattern"
)


class PostgresNamespaceRegistry(INamespaceRegistry):
    """Namespace registry backed by PostgreSQL schemas."""

    def __init__(
        self,
        session: AsyncSession,
        probe: NamespaceProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultNamespaceProbe()

    async def register(self, namespace: NamespaceName) -> None:
        """Create the schema if it does not exist yet.

        Raises:
            ProvisioningError: If the namespace is root or creation fails
        """
        if namespace.is_root:
            raise ProvisioningError(
                "The root namespace cannot be registered", namespace.value
            )
        try:
            await self._session.execute(CreateSchema(namespace.value, if_not_exists=True))
        except SQLAlchemyError as e:
            self._probe.namespace_registration_failed(namespace.value, e)
            raise ProvisioningError(
                f"Failed to create namespace {namespace}: {e}", namespace.value
            ) from e
        self._probe.namespace_registered(namespace.value)

    async def exists(self, namespace: NamespaceName) -> bool:
        result = await self._session.execute(_SCHEMA_EXISTS, {"name": namespace.value})
        return result.scalar_one_or_none() is not None

    async def list_all(self) -> set[NamespaceName]:
        """Return every schema shaped like a tenant namespace.

        Schemas that merely share the prefix (e.g. ``namespace_tmp``) are
        ignored.
        """
        # "_" is a LIKE wildcard
        pattern = NAMESPACE_PREFIX.replace("_", r"\_") + "%"
        result = await self._session.execute(_LIST_SCHEMAS, {"pattern": pattern})

        namespaces: set[NamespaceName] = set()
        for (schema_name,) in result.all():
            try:
                namespaces.add(NamespaceName.from_string(schema_name))
            except ValueError:
                continue
        return namespaces

    async def drop(self, namespace: NamespaceName) -> None:
        """Drop the schema and everything in it.

        Raises:
            ValueError: If asked to drop the root namespace
        """
        if namespace.is_root:
            raise ValueError("The root namespace cannot be dropped")
        await self._session.execute(
            DropSchema(namespace.value, cascade=True, if_exists=True)
        )
        self._probe.namespace_dropped(namespace.value)
