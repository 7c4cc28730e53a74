"""Unit tests for CrossNamespaceLookup."""

from unittest.mock import AsyncMock, Mock

import pytest

from iam.domain.aggregates import Principal
from iam.domain.value_objects import Role
from iam.ports.repositories import IPrincipalRepository
from shared_kernel.namespaces import NamespaceName
from tenancy.application.cross_namespace_lookup import CrossNamespaceLookup
from tenancy.application.observability import CrossNamespaceLookupProbe
from tenancy.domain.aggregates import Tenant
from tenancy.domain.value_objects import SubscriptionTier, TenantId
from tenancy.ports.repositories import INamespaceRegistry, ITenantRepository


def _tenant(tenant_id: int) -> Tenant:
    return Tenant(
        name=f"Tenant {tenant_id}",
        contact=f"owner{tenant_id}@example.com",
        subscription_tier=SubscriptionTier.BASIC,
        id=TenantId(tenant_id),
        namespace=NamespaceName.for_tenant(tenant_id),
        is_active=True,
    )


def _principal(principal_id: int, tenant_id: int) -> Principal:
    return Principal(
        id=principal_id,
        name="Sam Seller",
        email="sam@example.com",
        password_hash="hashed:pw",
        role=Role.SALES,
        tenant_id=tenant_id,
    )


class FakeDirectory:
    """Principal repositories keyed by namespace, recording every visit."""

    def __init__(self, holders: dict[NamespaceName, Principal]):
        self._holders = holders
        self.visited: list[NamespaceName] = []

    def __call__(self, namespace: NamespaceName) -> IPrincipalRepository:
        repo = Mock(spec=IPrincipalRepository)

        async def _get_by_email(email: str):
            self.visited.append(namespace)
            return self._holders.get(namespace)

        repo.get_by_email = AsyncMock(side_effect=_get_by_email)
        return repo


@pytest.fixture
def mock_tenant_repo():
    repo = Mock(spec=ITenantRepository)
    repo.list_all = AsyncMock(return_value=[_tenant(1), _tenant(2), _tenant(3)])
    return repo


@pytest.fixture
def mock_registry():
    registry = Mock(spec=INamespaceRegistry)
    registry.list_all = AsyncMock(
        return_value={NamespaceName.for_tenant(i) for i in (1, 2, 3, 4)}
    )
    return registry


@pytest.fixture
def mock_probe():
    return Mock(spec=CrossNamespaceLookupProbe)


def _lookup(mock_tenant_repo, mock_registry, directory, mock_probe):
    return CrossNamespaceLookup(
        tenant_repository=mock_tenant_repo,
        namespace_registry=mock_registry,
        principal_repository_factory=directory,
        probe=mock_probe,
    )


class TestActiveNamespaces:
    @pytest.mark.asyncio
    async def test_only_active_tenants_are_enumerated(
        self, mock_tenant_repo, mock_registry, mock_probe
    ):
        lookup = _lookup(mock_tenant_repo, mock_registry, FakeDirectory({}), mock_probe)

        active = await lookup.active_namespaces()

        mock_tenant_repo.list_all.assert_awaited_once_with(active_only=True)
        # namespace_4 is registered but belongs to no active tenant
        assert [a.namespace.value for a in active] == [
            "namespace_1",
            "namespace_2",
            "namespace_3",
        ]

    @pytest.mark.asyncio
    async def test_unregistered_namespace_is_skipped(
        self, mock_tenant_repo, mock_registry, mock_probe
    ):
        mock_registry.list_all.return_value = {
            NamespaceName.for_tenant(1),
            NamespaceName.for_tenant(3),
        }
        lookup = _lookup(mock_tenant_repo, mock_registry, FakeDirectory({}), mock_probe)

        active = await lookup.active_namespaces()

        assert [a.tenant_id for a in active] == [1, 3]
        mock_probe.unregistered_namespace_skipped.assert_called_once_with(
            2, "namespace_2"
        )


class TestFindByLogin:
    @pytest.mark.asyncio
    async def test_stops_at_first_match(
        self, mock_tenant_repo, mock_registry, mock_probe
    ):
        directory = FakeDirectory(
            {NamespaceName.for_tenant(2): _principal(11, tenant_id=2)}
        )
        lookup = _lookup(mock_tenant_repo, mock_registry, directory, mock_probe)

        location = await lookup.find_by_login("Sam@Example.com")

        assert location.namespace == NamespaceName.for_tenant(2)
        assert location.tenant_id == 2
        assert location.principal.id == 11
        assert directory.visited == [
            NamespaceName.for_tenant(1),
            NamespaceName.for_tenant(2),
        ]

    @pytest.mark.asyncio
    async def test_lowest_tenant_id_wins_on_duplicates(
        self, mock_tenant_repo, mock_registry, mock_probe
    ):
        directory = FakeDirectory(
            {
                NamespaceName.for_tenant(3): _principal(30, tenant_id=3),
                NamespaceName.for_tenant(2): _principal(20, tenant_id=2),
            }
        )
        lookup = _lookup(mock_tenant_repo, mock_registry, directory, mock_probe)

        first = await lookup.find_by_login("sam@example.com")
        second = await lookup.find_by_login("sam@example.com")

        assert first.tenant_id == second.tenant_id == 2

    @pytest.mark.asyncio
    async def test_scans_each_namespace_once_when_not_found(
        self, mock_tenant_repo, mock_registry, mock_probe
    ):
        directory = FakeDirectory({})
        lookup = _lookup(mock_tenant_repo, mock_registry, directory, mock_probe)

        assert await lookup.find_by_login("ghost@example.com") is None
        assert len(directory.visited) == 3
        assert len(set(directory.visited)) == 3
        mock_probe.principal_not_located.assert_called_once_with(3)

    @pytest.mark.asyncio
    async def test_deactivated_tenant_is_never_searched(
        self, mock_tenant_repo, mock_registry, mock_probe
    ):
        # The store only returns active tenants; tenant 2 was deactivated.
        mock_tenant_repo.list_all.return_value = [_tenant(1), _tenant(3)]
        directory = FakeDirectory(
            {NamespaceName.for_tenant(2): _principal(20, tenant_id=2)}
        )
        lookup = _lookup(mock_tenant_repo, mock_registry, directory, mock_probe)

        assert await lookup.find_by_login("sam@example.com") is None
        assert NamespaceName.for_tenant(2) not in directory.visited
