"""PostgreSQL implementation of ITenantRepository.

Tenant records live in the root namespace. A record is inserted before its
namespace exists (the namespace name derives from the assigned id), so new
rows carry a unique placeholder in ``namespace_name`` until ``save``
records the real one inside the same transaction.
"""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from ulid import ULID

from shared_kernel.namespaces import NamespaceName
from tenancy.domain.aggregates import Tenant
from tenancy.domain.value_objects import SubscriptionTier, TenantId
from tenancy.infrastructure.models import TenantModel
from tenancy.infrastructure.observability import (
    DefaultTenantRepositoryProbe,
    TenantRepositoryProbe,
)
from tenancy.ports.repositories import ITenantRepository

PENDING_NAMESPACE_PREFIX = "pending_"


class TenantRepository(ITenantRepository):
    """Repository managing PostgreSQL storage for Tenant records."""

    def __init__(
        self,
        session: AsyncSession,
        probe: TenantRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession bound to the root namespace
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultTenantRepositoryProbe()

    async def add(self, tenant: Tenant) -> Tenant:
        """Insert a tenant record and assign its id.

        Args:
            tenant: A tenant that has not been stored yet

        Returns:
            The same tenant with ``id`` and timestamps populated
        """
        if tenant.id is not None:
            raise ValueError(f"Tenant {tenant.id} is already stored")

        model = TenantModel(
            name=tenant.name,
            contact=tenant.contact,
            subscription_type=tenant.subscription_tier.value,
            namespace_name=(
                tenant.namespace.value
                if tenant.namespace is not None
                else f"{PENDING_NAMESPACE_PREFIX}{str(ULID()).lower()}"
            ),
            is_active=tenant.is_active,
        )
        self._session.add(model)
        await self._session.flush()

        tenant.id = TenantId(value=model.id)
        tenant.created_at = model.created_at
        tenant.updated_at = model.updated_at
        self._probe.tenant_inserted(model.id)
        return tenant

    async def save(self, tenant: Tenant) -> Tenant:
        """Persist changes to an existing tenant record.

        Raises:
            ValueError: If the tenant was never stored
        """
        if tenant.id is None:
            raise ValueError("Tenant must be added before it can be saved")

        model = await self._session.get(TenantModel, tenant.id.value)
        if model is None:
            raise ValueError(f"Tenant {tenant.id} does not exist")

        model.name = tenant.name
        model.contact = tenant.contact
        model.subscription_type = tenant.subscription_tier.value
        if tenant.namespace is not None:
            model.namespace_name = tenant.namespace.value
        model.is_active = tenant.is_active
        await self._session.flush()

        tenant.updated_at = model.updated_at
        self._probe.tenant_saved(tenant.id.value)
        return tenant

    async def get_by_id(self, tenant_id: TenantId) -> Tenant | None:
        """Fetch a tenant record by id.

        Returns:
            The Tenant, or None if not found
        """
        stmt = select(TenantModel).where(TenantModel.id == tenant_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        self._probe.tenant_retrieved(model.id)
        return self._to_domain(model)

    async def list_all(
        self,
        *,
        active_only: bool = False,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Tenant]:
        """List tenant records ordered by ascending id."""
        stmt = select(TenantModel).order_by(TenantModel.id.asc())
        if active_only:
            stmt = stmt.where(TenantModel.is_active.is_(True))
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self._session.execute(stmt)
        tenants = [self._to_domain(model) for model in result.scalars().all()]

        self._probe.tenants_listed(len(tenants), active_only)
        return tenants

    async def count(self, *, active: bool | None = None) -> int:
        """Count tenant records, optionally filtered by the active flag."""
        stmt = select(func.count()).select_from(TenantModel)
        if active is not None:
            stmt = stmt.where(TenantModel.is_active.is_(active))
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    @staticmethod
    def _to_domain(model: TenantModel) -> Tenant:
        namespace = (
            None
            if model.namespace_name.startswith(PENDING_NAMESPACE_PREFIX)
            else NamespaceName.from_string(model.namespace_name)
        )
        return Tenant(
            id=TenantId(value=model.id),
            name=model.name,
            contact=model.contact,
            subscription_tier=SubscriptionTier(model.subscription_type),
            namespace=namespace,
            is_active=model.is_active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
