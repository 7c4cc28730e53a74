"""Tenant administration service.

Operations platform administrators perform on existing tenant records.
Creation lives in ``TenantOnboardingService``; records are never deleted.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from tenancy.application.observability import (
    DefaultTenantServiceProbe,
    TenantServiceProbe,
)
from tenancy.application.value_objects import TenantCounts
from tenancy.domain.aggregates import Tenant
from tenancy.domain.exceptions import TenantNotFoundError
from tenancy.domain.value_objects import SubscriptionTier, TenantId
from tenancy.ports.repositories import ITenantRepository


class TenantService:
    """Application service for tenant administration."""

    def __init__(
        self,
        tenant_repository: ITenantRepository,
        session: AsyncSession,
        probe: TenantServiceProbe | None = None,
    ):
        self._tenant_repository = tenant_repository
        self._session = session
        self._probe = probe or DefaultTenantServiceProbe()

    async def list_tenants(
        self,
        *,
        page: int = 1,
        limit: int = 10,
        active_only: bool = False,
    ) -> tuple[list[Tenant], int]:
        """List a page of tenants ordered by id.

        Returns:
            The page of tenants and the total number matching the filter
        """
        tenants = await self._tenant_repository.list_all(
            active_only=active_only,
            limit=limit,
            offset=(page - 1) * limit,
        )
        total = await self._tenant_repository.count(
            active=True if active_only else None
        )
        self._probe.tenants_listed(count=len(tenants), total=total)
        return tenants, total

    async def get_tenant(self, tenant_id: TenantId) -> Tenant:
        """Retrieve a tenant record.

        Raises:
            TenantNotFoundError: If no record has this id
        """
        tenant = await self._tenant_repository.get_by_id(tenant_id)
        if tenant is None:
            self._probe.tenant_not_found(tenant_id.value)
            raise TenantNotFoundError(f"Tenant {tenant_id} not found")

        self._probe.tenant_retrieved(tenant_id.value)
        return tenant

    async def update_tenant(
        self,
        tenant_id: TenantId,
        name: str | None = None,
        contact: str | None = None,
        subscription_tier: str | SubscriptionTier | None = None,
    ) -> Tenant:
        """Update tenant metadata. The namespace never changes.

        Raises:
            TenantNotFoundError: If no record has this id
            ValidationError: If a provided value is invalid
        """
        async with self._session.begin():
            tenant = await self.get_tenant(tenant_id)
            if tenant.update_metadata(
                name=name, contact=contact, subscription_tier=subscription_tier
            ):
                await self._tenant_repository.save(tenant)
                self._probe.tenant_updated(tenant_id.value)
        return tenant

    async def activate_tenant(self, tenant_id: TenantId) -> Tenant:
        """Activate a tenant. Activating an active tenant is a no-op.

        Raises:
            TenantNotFoundError: If no record has this id
        """
        async with self._session.begin():
            tenant = await self.get_tenant(tenant_id)
            if tenant.activate():
                await self._tenant_repository.save(tenant)
                self._probe.tenant_activated(tenant_id.value)
        return tenant

    async def deactivate_tenant(self, tenant_id: TenantId) -> Tenant:
        """Deactivate a tenant.

        Takes effect on the tenant's very next request: every request
        re-reads the record during namespace resolution.

        Raises:
            TenantNotFoundError: If no record has this id
        """
        async with self._session.begin():
            tenant = await self.get_tenant(tenant_id)
            if tenant.deactivate():
                await self._tenant_repository.save(tenant)
                self._probe.tenant_deactivated(tenant_id.value)
        return tenant

    async def count_tenants(self) -> TenantCounts:
        total = await self._tenant_repository.count()
        active = await self._tenant_repository.count(active=True)
        return TenantCounts(total=total, active=active, inactive=total - active)
