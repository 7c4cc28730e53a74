"""Namespace-scoped database access.

Tenant tables are declared without a schema. A ``ScopedSession`` binds one
tenant namespace at construction and attaches it to every statement it
executes through SQLAlchemy's ``schema_translate_map`` execution option.
SQLAlchemy renders the namespace as a quoted identifier, so the name never
becomes part of the SQL text, and nothing is set on the pooled connection:
two concurrent requests sharing a connection in turn cannot observe each
other's namespace.
"""

from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy.engine import Result
from sqlalchemy.sql.expression import Executable
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.exceptions import InvalidNamespaceError
from shared_kernel.namespaces import NamespaceName


class ScopedSession:
    """An AsyncSession restricted to a single tenant namespace.

    Repositories for namespace data take a ScopedSession instead of a raw
    session, so constructing one without naming the namespace is not
    possible. Transactions are shared with the wrapped session.
    """

    def __init__(self, session: AsyncSession, namespace: NamespaceName):
        """Bind a session to a tenant namespace.

        Args:
            session: The request's session
            namespace: The tenant namespace to scope every statement to

        Raises:
            InvalidNamespaceError: If ``namespace`` is the root namespace
        """
        if namespace.is_root:
            raise InvalidNamespaceError(
                "Tenant data cannot be addressed in the root namespace"
            )
        self._session = session
        self._namespace = namespace
        self._execution_options: dict[str, Any] = {
            "schema_translate_map": {None: namespace.value},
        }

    @property
    def namespace(self) -> NamespaceName:
        return self._namespace

    async def execute(
        self,
        statement: Executable,
        params: Mapping[str, Any] | None = None,
    ) -> Result[Any]:
        """Execute a statement inside the bound namespace."""
        return await self._session.execute(
            statement,
            params,
            execution_options=self._execution_options,
        )

    async def scalar(
        self,
        statement: Executable,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Execute a statement inside the bound namespace and return one scalar."""
        return await self._session.scalar(
            statement,
            params,
            execution_options=self._execution_options,
        )

    def begin(self):
        """Begin a transaction on the wrapped session."""
        return self._session.begin()

    def begin_nested(self):
        """Begin a SAVEPOINT on the wrapped session."""
        return self._session.begin_nested()

    def in_transaction(self) -> bool:
        return self._session.in_transaction()

    def __repr__(self) -> str:
        return f"<ScopedSession(namespace={self._namespace.value})>"
