"""Unit tests for ScopedSession."""

from unittest.mock import AsyncMock, Mock

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from iam.infrastructure.models import users_table
from infrastructure.database.exceptions import InvalidNamespaceError
from infrastructure.database.scoping import ScopedSession
from shared_kernel.namespaces import NamespaceName


@pytest.fixture
def raw_session():
    session = Mock(spec=AsyncSession)
    session.execute = AsyncMock()
    session.scalar = AsyncMock(return_value=3)
    return session


class TestScopedSession:
    def test_refuses_root_namespace(self, raw_session):
        with pytest.raises(InvalidNamespaceError):
            ScopedSession(raw_session, NamespaceName.root())

    @pytest.mark.asyncio
    async def test_execute_translates_schema_to_namespace(self, raw_session):
        scoped = ScopedSession(raw_session, NamespaceName.for_tenant(4))
        stmt = select(users_table)

        await scoped.execute(stmt)

        raw_session.execute.assert_awaited_once_with(
            stmt,
            None,
            execution_options={"schema_translate_map": {None: "namespace_4"}},
        )

    @pytest.mark.asyncio
    async def test_scalar_translates_schema_to_namespace(self, raw_session):
        scoped = ScopedSession(raw_session, NamespaceName.for_tenant(4))

        result = await scoped.scalar(select(users_table.c.id))

        assert result == 3
        _, kwargs = raw_session.scalar.call_args
        assert kwargs["execution_options"] == {
            "schema_translate_map": {None: "namespace_4"}
        }

    @pytest.mark.asyncio
    async def test_two_scopes_on_one_session_stay_separate(self, raw_session):
        first = ScopedSession(raw_session, NamespaceName.for_tenant(1))
        second = ScopedSession(raw_session, NamespaceName.for_tenant(2))

        await first.execute(select(users_table))
        await second.execute(select(users_table))
        await first.execute(select(users_table))

        namespaces = [
            call.kwargs["execution_options"]["schema_translate_map"][None]
            for call in raw_session.execute.call_args_list
        ]
        assert namespaces == ["namespace_1", "namespace_2", "namespace_1"]

    def test_transactions_are_shared_with_wrapped_session(self, raw_session):
        scoped = ScopedSession(raw_session, NamespaceName.for_tenant(1))

        scoped.begin()
        scoped.begin_nested()

        raw_session.begin.assert_called_once()
        raw_session.begin_nested.assert_called_once()

    def test_namespace_tables_carry_no_schema(self):
        assert users_table.schema is None
