"""Repository port interfaces for the tenancy bounded context.

These protocols define the contracts for tenant record persistence and
namespace management. Implementations live in the infrastructure layer.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from shared_kernel.namespaces import NamespaceName
from tenancy.domain.aggregates import Tenant
from tenancy.domain.value_objects import TenantId


@runtime_checkable
class ITenantRepository(Protocol):
    """Repository for tenant records in the root namespace."""

    async def add(self, tenant: Tenant) -> Tenant:
        """Insert a new tenant record and return it with its assigned id.

        A tenant without a namespace is stored under a unique placeholder
        name until ``save`` records the derived one.
        """
        ...

    async def save(self, tenant: Tenant) -> Tenant:
        """Persist changes to an existing tenant record."""
        ...

    async def get_by_id(self, tenant_id: TenantId) -> Tenant | None:
        """Retrieve a tenant record by id."""
        ...

    async def list_all(
        self,
        *,
        active_only: bool = False,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Tenant]:
        """List tenant records ordered by ascending id."""
        ...

    async def count(self, *, active: bool | None = None) -> int:
        """Count tenant records, optionally filtered by the active flag."""
        ...


@runtime_checkable
class INamespaceRegistry(Protocol):
    """Durable set of provisioned namespaces.

    The registry knows nothing about tenant activity; callers that must
    honour it intersect ``list_all`` with the active tenant records.
    """

    async def register(self, namespace: NamespaceName) -> None:
        """Ensure the namespace exists as a data container.

        Raises:
            ProvisioningError: If the storage layer refuses creation
        """
        ...

    async def exists(self, namespace: NamespaceName) -> bool:
        """Check whether the namespace exists."""
        ...

    async def list_all(self) -> set[NamespaceName]:
        """Return every tenant namespace present in storage."""
        ...

    async def drop(self, namespace: NamespaceName) -> None:
        """Remove a namespace and everything inside it.

        Administrative only; used for best-effort onboarding cleanup.
        """
        ...


@runtime_checkable
class INamespaceProvisioner(Protocol):
    """Materializes the tenant table structure inside a namespace."""

    async def provision(self, namespace: NamespaceName) -> list[str]:
        """Apply every structural step not yet applied, in order.

        Returns:
            Names of the steps applied by this call (empty when the
            namespace was already complete)

        Raises:
            ProvisioningError: If any step fails
        """
        ...
