"""Tenant onboarding service.

The single entry point for creating a tenant. All root-namespace writes
and the namespace DDL share one transaction, so a failure anywhere after
the tenant record is inserted leaves no active record behind.
"""

from __future__ import annotations

from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import Principal
from iam.domain.value_objects import Role
from iam.ports.repositories import IPrincipalRepository
from shared_kernel.auth import PasswordHasher
from shared_kernel.namespaces import NamespaceName
from shared_kernel.validation import (
    validate_display_name,
    validate_email,
    validate_password,
)
from tenancy.application.observability import (
    DefaultOnboardingProbe,
    OnboardingProbe,
)
from tenancy.application.value_objects import AdminCredentials, OnboardedTenant
from tenancy.domain.aggregates import Tenant, TenantMetadata
from tenancy.domain.value_objects import SubscriptionTier
from tenancy.ports.exceptions import NamespaceCollisionError
from tenancy.ports.repositories import (
    INamespaceProvisioner,
    INamespaceRegistry,
    ITenantRepository,
)

PrincipalRepositoryFactory = Callable[[NamespaceName], IPrincipalRepository]


class TenantOnboardingService:
    """Creates a tenant, its namespace and its first administrator."""

    def __init__(
        self,
        tenant_repository: ITenantRepository,
        namespace_registry: INamespaceRegistry,
        namespace_provisioner: INamespaceProvisioner,
        principal_repository_factory: PrincipalRepositoryFactory,
        password_hasher: PasswordHasher,
        session: AsyncSession,
        probe: OnboardingProbe | None = None,
    ):
        """Initialize TenantOnboardingService with dependencies.

        Args:
            tenant_repository: Repository for tenant records
            namespace_registry: Registry creating and dropping namespaces
            namespace_provisioner: Applies tenant tables to a namespace
            principal_repository_factory: Builds a principal repository
                bound to a given tenant namespace
            password_hasher: Hashes the initial administrator password
            session: Database session for transaction management
            probe: Optional domain probe for observability
        """
        self._tenant_repository = tenant_repository
        self._registry = namespace_registry
        self._provisioner = namespace_provisioner
        self._principal_repository_factory = principal_repository_factory
        self._password_hasher = password_hasher
        self._session = session
        self._probe = probe or DefaultOnboardingProbe()

    async def onboard(
        self,
        name: str,
        contact: str,
        subscription_tier: str | SubscriptionTier,
        admin: AdminCredentials,
    ) -> OnboardedTenant:
        """Onboard a tenant.

        Args:
            name: Tenant display name (not unique)
            contact: Tenant contact email
            subscription_tier: Basic or Premium
            admin: Initial administrator of the tenant

        Returns:
            The active tenant, its administrator and the structural steps applied

        Raises:
            ValidationError: If any input is invalid; nothing was written
            NamespaceCollisionError: If the derived namespace already exists
            ProvisioningError: If the namespace could not be created or structured
        """
        metadata = TenantMetadata.create(
            name=name, contact=contact, subscription_tier=subscription_tier
        )
        admin_name = validate_display_name(admin.name, "Admin name")
        admin_email = validate_email(admin.email, "Admin email")
        validate_password(admin.password, "Admin password")
        password_hash = self._password_hasher.hash(admin.password)

        self._probe.onboarding_started(metadata.name)

        created_namespace: NamespaceName | None = None
        try:
            async with self._session.begin():
                tenant = await self._tenant_repository.add(Tenant.draft(metadata))
                namespace = tenant.assign_namespace()
                await self._tenant_repository.save(tenant)

                if await self._registry.exists(namespace):
                    self._probe.namespace_collision(tenant.id.value, namespace.value)
                    raise NamespaceCollisionError(namespace.value)

                await self._registry.register(namespace)
                created_namespace = namespace
                steps = await self._provisioner.provision(namespace)

                principals = self._principal_repository_factory(namespace)
                administrator = await principals.add(
                    Principal.create_tenant_user(
                        name=admin_name,
                        email=admin_email,
                        password_hash=password_hash,
                        role=Role.ADMIN,
                        tenant_id=tenant.id.value,
                    )
                )

                tenant.activate()
                await self._tenant_repository.save(tenant)
        except Exception as e:
            self._probe.onboarding_failed(
                metadata.name,
                created_namespace.value if created_namespace else None,
                e,
            )
            if created_namespace is not None:
                await self._drop_quietly(created_namespace)
            raise

        self._probe.tenant_onboarded(tenant.id.value, namespace.value, len(steps))
        return OnboardedTenant(
            tenant=tenant, admin=administrator, steps_applied=tuple(steps)
        )

    async def _drop_quietly(self, namespace: NamespaceName) -> None:
        """Best-effort removal of a namespace left by a failed attempt.

        The rolled-back transaction normally discarded it already. A
        leftover empty namespace is harmless, so failures are only logged.
        """
        try:
            async with self._session.begin():
                await self._registry.drop(namespace)
        except Exception as e:
            self._probe.namespace_cleanup_failed(namespace.value, e)
