"""Application-layer value objects for the tenancy bounded context.

Inputs and read-only views exchanged between the tenancy services and
their callers.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from iam.domain.aggregates import Principal
from shared_kernel.namespaces import NamespaceName
from tenancy.domain.aggregates import Tenant


@dataclass(frozen=True)
class AdminCredentials:
    """Initial administrator for a tenant being onboarded.

    Holds the plaintext password only until onboarding hashes it.
    """

    name: str
    email: str
    password: str

    def __repr__(self) -> str:
        return f"AdminCredentials(name={self.name!r}, email={self.email!r})"


@dataclass(frozen=True)
class OnboardedTenant:
    """Result of a successful onboarding."""

    tenant: Tenant
    admin: Principal
    steps_applied: tuple[str, ...]


@dataclass(frozen=True)
class ActiveNamespace:
    """An active tenant together with the registered namespace it owns."""

    tenant_id: int
    namespace: NamespaceName


@dataclass(frozen=True)
class PrincipalLocation:
    """Where a login identifier was found by the cross-namespace lookup."""

    principal: Principal
    namespace: NamespaceName
    tenant_id: int


@dataclass(frozen=True)
class TenantCounts:
    """Tenant record counts by activity."""

    total: int
    active: int
    inactive: int


@dataclass(frozen=True)
class PlatformStats:
    """Inventory aggregated over every active tenant namespace."""

    tenants: TenantCounts
    total_projects: int
    total_units: int
    available_units: int
    booked_units: int
    sold_units: int
    revenue: Decimal
    currency: str

    @property
    def occupancy_rate(self) -> float:
        """Percentage of units booked or sold, rounded to two decimals."""
        if self.total_units == 0:
            return 0.0
        occupied = self.booked_units + self.sold_units
        return round(occupied / self.total_units * 100, 2)
