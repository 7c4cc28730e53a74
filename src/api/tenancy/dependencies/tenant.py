"""Wiring of tenancy repositories and services."""

from typing import Annotated, Callable

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.dependencies.authentication import get_password_hasher
from iam.infrastructure.principal_repository import PrincipalRepository
from iam.ports.repositories import IPrincipalRepository
from infrastructure.database.dependencies import get_session
from infrastructure.database.scoping import ScopedSession
from infrastructure.settings import get_tenancy_settings
from inventory.infrastructure.summary_reader import InventorySummaryReader
from inventory.ports.repositories import IInventorySummaryReader
from shared_kernel.auth import PasswordHasher
from shared_kernel.namespaces import NamespaceName
from tenancy.application.cross_namespace_lookup import CrossNamespaceLookup
from tenancy.application.namespace_resolver import NamespaceResolver
from tenancy.application.services import (
    PlatformStatsService,
    TenantOnboardingService,
    TenantService,
)
from tenancy.infrastructure.namespace_provisioner import NamespaceProvisioner
from tenancy.infrastructure.namespace_registry import PostgresNamespaceRegistry
from tenancy.infrastructure.tenant_repository import TenantRepository


def get_tenant_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> TenantRepository:
    return TenantRepository(session=session)


def get_namespace_registry(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PostgresNamespaceRegistry:
    return PostgresNamespaceRegistry(session=session)


def get_namespace_provisioner(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> NamespaceProvisioner:
    return NamespaceProvisioner(session=session)


def get_principal_repository_factory(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> Callable[[NamespaceName], IPrincipalRepository]:
    """Build principal repositories for namespaces chosen at call time.

    Only the onboarding and login paths need this; every other request
    gets one repository bound to its resolved namespace.
    """

    def _factory(namespace: NamespaceName) -> IPrincipalRepository:
        return PrincipalRepository(ScopedSession(session, namespace))

    return _factory


def get_namespace_resolver(
    tenant_repository: Annotated[TenantRepository, Depends(get_tenant_repository)],
) -> NamespaceResolver:
    return NamespaceResolver(tenant_repository=tenant_repository)


def get_cross_namespace_lookup(
    tenant_repository: Annotated[TenantRepository, Depends(get_tenant_repository)],
    registry: Annotated[PostgresNamespaceRegistry, Depends(get_namespace_registry)],
    principal_repository_factory: Annotated[
        Callable[[NamespaceName], IPrincipalRepository],
        Depends(get_principal_repository_factory),
    ],
) -> CrossNamespaceLookup:
    return CrossNamespaceLookup(
        tenant_repository=tenant_repository,
        namespace_registry=registry,
        principal_repository_factory=principal_repository_factory,
    )


def get_onboarding_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    tenant_repository: Annotated[TenantRepository, Depends(get_tenant_repository)],
    registry: Annotated[PostgresNamespaceRegistry, Depends(get_namespace_registry)],
    provisioner: Annotated[NamespaceProvisioner, Depends(get_namespace_provisioner)],
    principal_repository_factory: Annotated[
        Callable[[NamespaceName], IPrincipalRepository],
        Depends(get_principal_repository_factory),
    ],
    password_hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> TenantOnboardingService:
    return TenantOnboardingService(
        tenant_repository=tenant_repository,
        namespace_registry=registry,
        namespace_provisioner=provisioner,
        principal_repository_factory=principal_repository_factory,
        password_hasher=password_hasher,
        session=session,
    )


def get_tenant_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    tenant_repository: Annotated[TenantRepository, Depends(get_tenant_repository)],
) -> TenantService:
    return TenantService(tenant_repository=tenant_repository, session=session)


def get_platform_stats_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    tenant_service: Annotated[TenantService, Depends(get_tenant_service)],
    lookup: Annotated[CrossNamespaceLookup, Depends(get_cross_namespace_lookup)],
) -> PlatformStatsService:
    def _summary_reader(namespace: NamespaceName) -> IInventorySummaryReader:
        return InventorySummaryReader(ScopedSession(session, namespace))

    return PlatformStatsService(
        tenant_service=tenant_service,
        lookup=lookup,
        summary_reader_factory=_summary_reader,
        currency=get_tenancy_settings().currency,
    )
