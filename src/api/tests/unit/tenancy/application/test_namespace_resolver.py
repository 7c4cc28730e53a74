"""Unit tests for NamespaceResolver."""

from unittest.mock import AsyncMock, Mock

import pytest

from shared_kernel.auth import TokenClaims
from shared_kernel.middleware.observability import RequestContextProbe
from shared_kernel.namespaces import NamespaceName
from tenancy.application.namespace_resolver import NamespaceResolver
from tenancy.domain.aggregates import Tenant
from tenancy.domain.exceptions import (
    MalformedContextError,
    TenantNotFoundError,
    TenantSuspendedError,
)
from tenancy.domain.value_objects import SubscriptionTier, TenantId
from tenancy.ports.repositories import ITenantRepository


def _tenant(tenant_id: int = 7, is_active: bool = True) -> Tenant:
    return Tenant(
        name="Acme Builders",
        contact="owner@acme.com",
        subscription_tier=SubscriptionTier.BASIC,
        id=TenantId(tenant_id),
        namespace=NamespaceName.for_tenant(tenant_id),
        is_active=is_active,
    )


def _claims(**overrides) -> TokenClaims:
    fields = {
        "principal_id": 3,
        "role": "Sales",
        "email": "sales@acme.com",
        "tenant_id": 7,
        "namespace": "namespace_7",
    }
    fields.update(overrides)
    return TokenClaims(**fields)


@pytest.fixture
def mock_tenant_repo():
    repo = Mock(spec=ITenantRepository)
    repo.get_by_id = AsyncMock(return_value=_tenant())
    return repo


@pytest.fixture
def mock_probe():
    return Mock(spec=RequestContextProbe)


@pytest.fixture
def resolver(mock_tenant_repo, mock_probe):
    return NamespaceResolver(tenant_repository=mock_tenant_repo, probe=mock_probe)


class TestTenantClaims:
    @pytest.mark.asyncio
    async def test_active_tenant_resolves_to_its_namespace(self, resolver, mock_probe):
        context = await resolver.resolve(_claims())

        assert context.namespace == NamespaceName.for_tenant(7)
        assert context.tenant_id == 7
        assert context.principal_id == 3
        assert context.role == "Sales"
        assert context.login == "sales@acme.com"
        assert not context.is_root
        mock_probe.tenant_context_resolved.assert_called_once_with(
            7, "namespace_7", 3
        )

    @pytest.mark.asyncio
    async def test_tenant_is_reread_on_every_request(self, resolver, mock_tenant_repo):
        await resolver.resolve(_claims())
        await resolver.resolve(_claims())

        assert mock_tenant_repo.get_by_id.await_count == 2

    @pytest.mark.asyncio
    async def test_missing_tenant(self, resolver, mock_tenant_repo, mock_probe):
        mock_tenant_repo.get_by_id.return_value = None

        with pytest.raises(TenantNotFoundError):
            await resolver.resolve(_claims())
        mock_probe.tenant_not_found.assert_called_once_with(7, 3)

    @pytest.mark.asyncio
    async def test_deactivated_tenant_is_rejected_with_a_valid_token(
        self, resolver, mock_tenant_repo, mock_probe
    ):
        mock_tenant_repo.get_by_id.return_value = _tenant(is_active=False)

        with pytest.raises(TenantSuspendedError):
            await resolver.resolve(_claims())
        mock_probe.tenant_suspended.assert_called_once_with(7, 3)

    @pytest.mark.asyncio
    async def test_namespace_of_another_tenant_is_malformed(
        self, resolver, mock_tenant_repo
    ):
        with pytest.raises(MalformedContextError):
            await resolver.resolve(_claims(namespace="namespace_8"))

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides",
        [
            {"tenant_id": None},
            {"namespace": None},
            {"namespace": "namespace_7; DROP TABLE users"},
            {"namespace": "public"},
            {"tenant_id": 0},
            {"role": "Landlord"},
        ],
    )
    async def test_malformed_claims_never_reach_the_store(
        self, resolver, mock_tenant_repo, mock_probe, overrides
    ):
        with pytest.raises(MalformedContextError):
            await resolver.resolve(_claims(**overrides))

        mock_tenant_repo.get_by_id.assert_not_called()
        mock_probe.malformed_context.assert_called_once()


class TestPlatformClaims:
    @pytest.mark.asyncio
    async def test_platform_admin_resolves_to_root(self, resolver, mock_tenant_repo):
        context = await resolver.resolve(
            _claims(role="Super Admin", tenant_id=None, namespace=None)
        )

        assert context.is_root
        assert context.tenant_id is None
        mock_tenant_repo.get_by_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_platform_claim_carrying_a_tenant_is_malformed(self, resolver):
        with pytest.raises(MalformedContextError):
            await resolver.resolve(_claims(role="Super Admin"))
