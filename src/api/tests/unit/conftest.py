"""Unit test fixtures with mocked dependencies."""

from unittest.mock import AsyncMock, Mock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.scoping import ScopedSession
from shared_kernel.namespaces import NamespaceName


def _transaction_mock() -> AsyncMock:
    ctx_manager = AsyncMock()
    ctx_manager.__aenter__ = AsyncMock(return_value=None)
    ctx_manager.__aexit__ = AsyncMock(return_value=None)
    return ctx_manager


@pytest.fixture
def mock_session():
    """Mock AsyncSession whose begin() works as an async context manager."""
    session = Mock(spec=AsyncSession)
    session.begin = Mock(return_value=_transaction_mock())
    session.begin_nested = Mock(return_value=_transaction_mock())
    return session


@pytest.fixture
def tenant_namespace() -> NamespaceName:
    return NamespaceName.for_tenant(7)


@pytest.fixture
def mock_scoped_session(tenant_namespace):
    """Mock ScopedSession bound to ``namespace_7``."""
    session = Mock(spec=ScopedSession)
    session.namespace = tenant_namespace
    session.begin = Mock(return_value=_transaction_mock())
    session.begin_nested = Mock(return_value=_transaction_mock())
    return session


@pytest.fixture
def fake_hasher():
    """Deterministic PasswordHasher stand-in; bcrypt is too slow for unit tests."""
    hasher = Mock()
    hasher.hash = Mock(side_effect=lambda plaintext: f"hashed:{plaintext}")
    hasher.verify = Mock(
        side_effect=lambda plaintext, hashed: hashed == f"hashed:{plaintext}"
    )
    return hasher
