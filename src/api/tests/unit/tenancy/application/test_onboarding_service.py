"""Unit tests for TenantOnboardingService."""

from dataclasses import replace
from unittest.mock import AsyncMock, Mock

import pytest

from iam.domain.aggregates import Principal
from iam.domain.value_objects import Role
from iam.ports.repositories import IPrincipalRepository
from shared_kernel.namespaces import NamespaceName
from shared_kernel.validation import ValidationError
from tenancy.application.observability import OnboardingProbe
from tenancy.application.services import TenantOnboardingService
from tenancy.application.value_objects import AdminCredentials
from tenancy.domain.aggregates import Tenant
from tenancy.domain.value_objects import TenantId
from tenancy.ports.exceptions import NamespaceCollisionError, ProvisioningError
from tenancy.ports.repositories import (
    INamespaceProvisioner,
    INamespaceRegistry,
    ITenantRepository,
)

STEPS = [
    "0001_create_users",
    "0002_create_projects",
    "0003_create_units",
    "0004_create_audit_logs",
]
ADMIN = AdminCredentials(
    name="First Admin", email="Admin@Acme.com", password="s3cret-pass"
)


@pytest.fixture
def mock_tenant_repo():
    repo = Mock(spec=ITenantRepository)

    async def _add(tenant: Tenant) -> Tenant:
        tenant.id = TenantId(7)
        return tenant

    repo.add = AsyncMock(side_effect=_add)
    repo.save = AsyncMock(side_effect=lambda tenant: tenant)
    return repo


@pytest.fixture
def mock_registry():
    registry = Mock(spec=INamespaceRegistry)
    registry.exists = AsyncMock(return_value=False)
    registry.register = AsyncMock()
    registry.drop = AsyncMock()
    return registry


@pytest.fixture
def mock_provisioner():
    provisioner = Mock(spec=INamespaceProvisioner)
    provisioner.provision = AsyncMock(return_value=list(STEPS))
    return provisioner


@pytest.fixture
def mock_principal_repo():
    repo = Mock(spec=IPrincipalRepository)
    repo.add = AsyncMock(side_effect=lambda principal: replace(principal, id=1))
    return repo


@pytest.fixture
def principal_factory(mock_principal_repo):
    return Mock(return_value=mock_principal_repo)


@pytest.fixture
def mock_probe():
    return Mock(spec=OnboardingProbe)


@pytest.fixture
def service(
    mock_tenant_repo,
    mock_registry,
    mock_provisioner,
    principal_factory,
    fake_hasher,
    mock_session,
    mock_probe,
):
    return TenantOnboardingService(
        tenant_repository=mock_tenant_repo,
        namespace_registry=mock_registry,
        namespace_provisioner=mock_provisioner,
        principal_repository_factory=principal_factory,
        password_hasher=fake_hasher,
        session=mock_session,
        probe=mock_probe,
    )


async def _onboard(service, **overrides):
    fields = {
        "name": "Acme Builders",
        "contact": "owner@acme.com",
        "subscription_tier": "Premium",
        "admin": ADMIN,
    }
    fields.update(overrides)
    return await service.onboard(**fields)


class TestSuccessfulOnboarding:
    @pytest.mark.asyncio
    async def test_returns_active_tenant_with_derived_namespace(self, service):
        result = await _onboard(service)

        assert result.tenant.id == TenantId(7)
        assert result.tenant.namespace == NamespaceName.for_tenant(7)
        assert result.tenant.is_active
        assert result.steps_applied == tuple(STEPS)

    @pytest.mark.asyncio
    async def test_registers_and_provisions_the_derived_namespace(
        self, service, mock_registry, mock_provisioner
    ):
        await _onboard(service)

        namespace = NamespaceName.for_tenant(7)
        mock_registry.register.assert_awaited_once_with(namespace)
        mock_provisioner.provision.assert_awaited_once_with(namespace)
        mock_registry.drop.assert_not_called()

    @pytest.mark.asyncio
    async def test_creates_admin_inside_tenant_namespace(
        self, service, principal_factory, mock_principal_repo
    ):
        result = await _onboard(service)

        principal_factory.assert_called_once_with(NamespaceName.for_tenant(7))
        created: Principal = mock_principal_repo.add.call_args.args[0]
        assert created.role is Role.ADMIN
        assert created.tenant_id == 7
        assert created.email == "admin@acme.com"
        assert created.password_hash == "hashed:s3cret-pass"
        assert result.admin.id == 1

    @pytest.mark.asyncio
    async def test_everything_happens_in_one_transaction(self, service, mock_session):
        await _onboard(service)

        mock_session.begin.assert_called_once()

    @pytest.mark.asyncio
    async def test_tenant_is_saved_active_last(self, service, mock_tenant_repo):
        await _onboard(service)

        final_save = mock_tenant_repo.save.await_args_list[-1].args[0]
        assert final_save.is_active


class TestValidation:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides",
        [
            {"name": "ab"},
            {"contact": "not-an-email"},
            {"subscription_tier": "Gold"},
            {"admin": AdminCredentials(name="Admin", email="bad", password="long-enough")},
            {"admin": AdminCredentials(name="Admin", email="a@b.com", password="short")},
        ],
    )
    async def test_invalid_input_has_no_side_effects(
        self, service, overrides, mock_tenant_repo, mock_registry, mock_session
    ):
        with pytest.raises(ValidationError):
            await _onboard(service, **overrides)

        mock_session.begin.assert_not_called()
        mock_tenant_repo.add.assert_not_called()
        mock_registry.register.assert_not_called()


class TestProvisioningFailure:
    @pytest.mark.asyncio
    async def test_failure_propagates_and_drops_namespace(
        self, service, mock_provisioner, mock_registry, mock_tenant_repo, mock_probe
    ):
        mock_provisioner.provision.side_effect = ProvisioningError(
            "boom", "namespace_7", step="0003_create_units"
        )

        with pytest.raises(ProvisioningError):
            await _onboard(service)

        mock_registry.drop.assert_awaited_once_with(NamespaceName.for_tenant(7))
        saved = [call.args[0] for call in mock_tenant_repo.save.await_args_list]
        assert not any(tenant.is_active for tenant in saved)
        mock_probe.onboarding_failed.assert_called_once()

    @pytest.mark.asyncio
    async def test_admin_creation_failure_also_rolls_back(
        self, service, mock_principal_repo, mock_registry
    ):
        mock_principal_repo.add.side_effect = RuntimeError("insert failed")

        with pytest.raises(RuntimeError, match="insert failed"):
            await _onboard(service)

        mock_registry.drop.assert_awaited_once_with(NamespaceName.for_tenant(7))

    @pytest.mark.asyncio
    async def test_registration_failure_does_not_drop(self, service, mock_registry):
        mock_registry.register.side_effect = ProvisioningError("denied", "namespace_7")

        with pytest.raises(ProvisioningError):
            await _onboard(service)

        mock_registry.drop.assert_not_called()

    @pytest.mark.asyncio
    async def test_cleanup_failure_is_logged_not_raised(
        self, service, mock_provisioner, mock_registry, mock_probe
    ):
        mock_provisioner.provision.side_effect = ProvisioningError("boom", "namespace_7")
        mock_registry.drop.side_effect = RuntimeError("connection lost")

        with pytest.raises(ProvisioningError):
            await _onboard(service)

        mock_probe.namespace_cleanup_failed.assert_called_once()


class TestNamespaceCollision:
    @pytest.mark.asyncio
    async def test_existing_namespace_is_fatal_and_left_alone(
        self, service, mock_registry, mock_provisioner, mock_probe
    ):
        mock_registry.exists.return_value = True

        with pytest.raises(NamespaceCollisionError):
            await _onboard(service)

        mock_registry.register.assert_not_called()
        mock_provisioner.provision.assert_not_called()
        mock_registry.drop.assert_not_called()
        mock_probe.namespace_collision.assert_called_once_with(7, "namespace_7")
