"""Platform statistics aggregated across tenant namespaces.

No query spans two namespaces: the service walks the active namespaces
and issues one scoped summary query per namespace.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Callable

from inventory.ports.repositories import IInventorySummaryReader
from shared_kernel.namespaces import NamespaceName
from tenancy.application.cross_namespace_lookup import CrossNamespaceLookup
from tenancy.application.observability import (
    DefaultTenantServiceProbe,
    TenantServiceProbe,
)
from tenancy.application.services.tenant_service import TenantService
from tenancy.application.value_objects import PlatformStats

InventorySummaryReaderFactory = Callable[[NamespaceName], IInventorySummaryReader]


class PlatformStatsService:
    """Computes the platform administrator dashboard figures."""

    def __init__(
        self,
        tenant_service: TenantService,
        lookup: CrossNamespaceLookup,
        summary_reader_factory: InventorySummaryReaderFactory,
        currency: str,
        probe: TenantServiceProbe | None = None,
    ):
        self._tenant_service = tenant_service
        self._lookup = lookup
        self._summary_reader_factory = summary_reader_factory
        self._currency = currency
        self._probe = probe or DefaultTenantServiceProbe()

    async def get_stats(self) -> PlatformStats:
        counts = await self._tenant_service.count_tenants()
        namespaces = await self._lookup.active_namespaces()

        projects = units = available = booked = sold = 0
        revenue = Decimal("0")
        for active in namespaces:
            summary = await self._summary_reader_factory(active.namespace).summarize()
            projects += summary.active_projects
            units += summary.total_units
            available += summary.available_units
            booked += summary.booked_units
            sold += summary.sold_units
            revenue += summary.revenue

        self._probe.platform_stats_computed(len(namespaces))
        return PlatformStats(
            tenants=counts,
            total_projects=projects,
            total_units=units,
            available_units=available,
            booked_units=booked,
            sold_units=sold,
            revenue=revenue.quantize(Decimal("0.01")),
            currency=self._currency,
        )
