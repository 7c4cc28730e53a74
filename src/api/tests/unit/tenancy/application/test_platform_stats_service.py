"""Unit tests for PlatformStatsService."""

from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import pytest

from inventory.domain.value_objects import InventorySummary
from inventory.ports.repositories import IInventorySummaryReader
from shared_kernel.namespaces import NamespaceName
from tenancy.application.cross_namespace_lookup import CrossNamespaceLookup
from tenancy.application.services import PlatformStatsService, TenantService
from tenancy.application.value_objects import ActiveNamespace, TenantCounts

SUMMARIES = {
    NamespaceName.for_tenant(1): InventorySummary(
        active_projects=2,
        total_units=10,
        available_units=6,
        booked_units=3,
        sold_units=1,
        revenue=Decimal("250000.00"),
    ),
    NamespaceName.for_tenant(2): InventorySummary(
        active_projects=1,
        total_units=10,
        available_units=5,
        booked_units=0,
        sold_units=5,
        revenue=Decimal("1000000.505"),
    ),
}


def _reader(namespace: NamespaceName) -> IInventorySummaryReader:
    reader = Mock(spec=IInventorySummaryReader)
    reader.summarize = AsyncMock(return_value=SUMMARIES[namespace])
    return reader


@pytest.fixture
def service():
    tenant_service = Mock(spec=TenantService)
    tenant_service.count_tenants = AsyncMock(
        return_value=TenantCounts(total=3, active=2, inactive=1)
    )
    lookup = Mock(spec=CrossNamespaceLookup)
    lookup.active_namespaces = AsyncMock(
        return_value=[
            ActiveNamespace(tenant_id=1, namespace=NamespaceName.for_tenant(1)),
            ActiveNamespace(tenant_id=2, namespace=NamespaceName.for_tenant(2)),
        ]
    )
    return PlatformStatsService(
        tenant_service=tenant_service,
        lookup=lookup,
        summary_reader_factory=Mock(side_effect=_reader),
        currency="USD",
    )


@pytest.mark.asyncio
async def test_sums_every_active_namespace(service):
    stats = await service.get_stats()

    assert stats.tenants.total == 3
    assert stats.total_projects == 3
    assert stats.total_units == 20
    assert stats.available_units == 11
    assert stats.booked_units == 3
    assert stats.sold_units == 6
    assert stats.revenue == Decimal("1250000.50")
    assert stats.currency == "USD"


@pytest.mark.asyncio
async def test_occupancy_rate(service):
    stats = await service.get_stats()

    assert stats.occupancy_rate == 45.0


@pytest.mark.asyncio
async def test_no_namespaces_gives_zero_occupancy(service):
    service._lookup.active_namespaces.return_value = []

    stats = await service.get_stats()

    assert stats.total_units == 0
    assert stats.occupancy_rate == 0.0
