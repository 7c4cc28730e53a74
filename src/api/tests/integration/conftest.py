"""Integration test fixtures.

These fixtures require a running PostgreSQL instance. Every test starts
from an empty root namespace and no tenant namespaces.

Services open their own transactions, so each step of a test uses a
fresh session from ``sessionmaker``.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable
import os

import pytest
import pytest_asyncio
from pydantic import SecretStr
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from iam.infrastructure.models import PlatformUserModel
from iam.infrastructure.principal_repository import PrincipalRepository
from infrastructure.database.engines import create_engine
from infrastructure.database.models import Base
from infrastructure.database.scoping import ScopedSession
from infrastructure.settings import DatabaseSettings
from shared_kernel.auth import BcryptPasswordHasher
from tenancy.application.cross_namespace_lookup import CrossNamespaceLookup
from tenancy.application.services import TenantOnboardingService
from tenancy.application.value_objects import AdminCredentials, OnboardedTenant
from tenancy.infrastructure.models import TenantModel
from tenancy.infrastructure.namespace_provisioner import NamespaceProvisioner
from tenancy.infrastructure.namespace_registry import PostgresNamespaceRegistry
from tenancy.infrastructure.structural_migrations import (
    STRUCTURAL_MIGRATIONS,
    StructuralMigration,
)
from tenancy.infrastructure.tenant_repository import TenantRepository

ROOT_TABLES = [TenantModel.__table__, PlatformUserModel.__table__]

_TENANT_SCHEMAS = text(
    "SELECT schema_name FROM information_schema.schemata "
    r"WHERE schema_name LIKE 'namespace\_%'"
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (requires database)",
    )


@pytest.fixture(scope="session")
def integration_db_settings() -> DatabaseSettings:
    """Database settings for integration tests.

    Override with environment variables:
        HOUSINGRAM_DB_HOST, HOUSINGRAM_DB_PORT, etc.
    """
    return DatabaseSettings(
        host=os.getenv("HOUSINGRAM_DB_HOST", "localhost"),
        port=int(os.getenv("HOUSINGRAM_DB_PORT", "5432")),
        database=os.getenv("HOUSINGRAM_DB_DATABASE", "housingram_test"),
        username=os.getenv("HOUSINGRAM_DB_USERNAME", "housingram"),
        password=SecretStr(
            os.getenv("HOUSINGRAM_DB_PASSWORD", "housingram_dev_password")
        ),
    )


async def _reset(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        result = await conn.execute(_TENANT_SCHEMAS)
        for (schema_name,) in result.all():
            await conn.execute(text(f'DROP SCHEMA "{schema_name}" CASCADE'))
        await conn.run_sync(Base.metadata.create_all, tables=ROOT_TABLES)
        await conn.execute(
            text("TRUNCATE tenants, platform_users RESTART IDENTITY CASCADE")
        )


@pytest_asyncio.fixture
async def engine(
    integration_db_settings: DatabaseSettings,
) -> AsyncGenerator[AsyncEngine, None]:
    """Provide an engine against a clean database."""
    engine = create_engine(integration_db_settings)
    await _reset(engine)
    yield engine
    await _reset(engine)
    await engine.dispose()


@pytest.fixture
def sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


def build_onboarding_service(
    session: AsyncSession,
    migrations: tuple[StructuralMigration, ...] = STRUCTURAL_MIGRATIONS,
) -> TenantOnboardingService:
    return TenantOnboardingService(
        tenant_repository=TenantRepository(session),
        namespace_registry=PostgresNamespaceRegistry(session),
        namespace_provisioner=NamespaceProvisioner(session, migrations=migrations),
        principal_repository_factory=lambda ns: PrincipalRepository(
            ScopedSession(session, ns)
        ),
        password_hasher=BcryptPasswordHasher(rounds=4),
        session=session,
    )


def build_lookup(session: AsyncSession) -> CrossNamespaceLookup:
    return CrossNamespaceLookup(
        tenant_repository=TenantRepository(session),
        namespace_registry=PostgresNamespaceRegistry(session),
        principal_repository_factory=lambda ns: PrincipalRepository(
            ScopedSession(session, ns)
        ),
    )


@pytest.fixture
def onboard(
    sessionmaker: async_sessionmaker[AsyncSession],
) -> Callable[..., Awaitable[OnboardedTenant]]:
    """Onboard a tenant in its own session."""

    async def _onboard(
        name: str, admin_email: str, password: str = "admin-password"
    ) -> OnboardedTenant:
        async with sessionmaker() as session:
            return await build_onboarding_service(session).onboard(
                name=name,
                contact="contact@example.com",
                subscription_tier="Basic",
                admin=AdminCredentials(
                    name="Tenant Admin", email=admin_email, password=password
                ),
            )

    return _onboard


@pytest.fixture
def lookup_for() -> Callable[[AsyncSession], CrossNamespaceLookup]:
    return build_lookup


@pytest.fixture
def onboarding_service_for() -> Callable[..., TenantOnboardingService]:
    """Build an onboarding service, optionally with custom structural steps."""
    return build_onboarding_service
