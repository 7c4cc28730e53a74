"""Unit tests for the platform administrator routes."""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from iam.domain.aggregates import Principal
from iam.domain.value_objects import Role
from shared_kernel.middleware import RequestContext
from shared_kernel.namespaces import NamespaceName
from shared_kernel.validation import ValidationError
from tenancy.application.services import (
    PlatformStatsService,
    TenantOnboardingService,
    TenantService,
)
from tenancy.application.value_objects import (
    OnboardedTenant,
    PlatformStats,
    TenantCounts,
)
from tenancy.domain.aggregates import Tenant
from tenancy.domain.exceptions import TenantNotFoundError
from tenancy.domain.value_objects import SubscriptionTier, TenantId
from tenancy.ports.exceptions import ProvisioningError

ONBOARD_BODY = {
    "name": "Acme Builders",
    "contact": "owner@acme.com",
    "subscription_type": "Premium",
    "admin": {"name": "Ada", "email": "ada@acme.com", "password": "s3cret-pass"},
}


def _tenant(is_active: bool = True) -> Tenant:
    return Tenant(
        name="Acme Builders",
        contact="owner@acme.com",
        subscription_tier=SubscriptionTier.PREMIUM,
        id=TenantId(7),
        namespace=NamespaceName.for_tenant(7),
        is_active=is_active,
    )


def _super_admin_context() -> RequestContext:
    return RequestContext(
        namespace=NamespaceName.root(),
        tenant_id=None,
        principal_id=1,
        role=Role.SUPER_ADMIN.value,
    )


@pytest.fixture
def mock_onboarding_service() -> AsyncMock:
    return AsyncMock(spec=TenantOnboardingService)


@pytest.fixture
def mock_tenant_service() -> AsyncMock:
    return AsyncMock(spec=TenantService)


@pytest.fixture
def mock_stats_service() -> AsyncMock:
    return AsyncMock(spec=PlatformStatsService)


@pytest.fixture
def request_context() -> RequestContext:
    return _super_admin_context()


@pytest.fixture
def test_client(
    mock_onboarding_service: AsyncMock,
    mock_tenant_service: AsyncMock,
    mock_stats_service: AsyncMock,
    request_context: RequestContext,
) -> TestClient:
    """Create TestClient with mocked dependencies."""
    from tenancy.dependencies.request_context import get_request_context
    from tenancy.dependencies.tenant import (
        get_onboarding_service,
        get_platform_stats_service,
        get_tenant_service,
    )
    from tenancy.presentation import router

    app = FastAPI()
    app.dependency_overrides[get_onboarding_service] = lambda: mock_onboarding_service
    app.dependency_overrides[get_tenant_service] = lambda: mock_tenant_service
    app.dependency_overrides[get_platform_stats_service] = lambda: mock_stats_service
    app.dependency_overrides[get_request_context] = lambda: request_context
    app.include_router(router)

    return TestClient(app)


class TestCreateTenant:
    def test_returns_201_with_tenant_and_admin(
        self, test_client: TestClient, mock_onboarding_service: AsyncMock
    ) -> None:
        admin = Principal(
            id=1,
            name="Ada",
            email="ada@acme.com",
            password_hash="hashed",
            role=Role.ADMIN,
            tenant_id=7,
        )
        mock_onboarding_service.onboard.return_value = OnboardedTenant(
            tenant=_tenant(), admin=admin, steps_applied=("0001_create_users",)
        )

        response = test_client.post("/super-admin/tenants", json=ONBOARD_BODY)

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["tenant"]["namespace"] == "namespace_7"
        assert body["tenant"]["subscription_type"] == "Premium"
        assert body["admin"]["role"] == "Admin"
        assert "password" not in body["admin"]
        assert "password_hash" not in body["admin"]

        credentials = mock_onboarding_service.onboard.call_args.kwargs["admin"]
        assert credentials.email == "ada@acme.com"

    def test_invalid_input_returns_400(
        self, test_client: TestClient, mock_onboarding_service: AsyncMock
    ) -> None:
        mock_onboarding_service.onboard.side_effect = ValidationError(
            "Invalid email address"
        )

        response = test_client.post("/super-admin/tenants", json=ONBOARD_BODY)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Invalid email address"

    def test_provisioning_failure_returns_500_without_details(
        self, test_client: TestClient, mock_onboarding_service: AsyncMock
    ) -> None:
        mock_onboarding_service.onboard.side_effect = ProvisioningError(
            "relation already exists", "namespace_7", step="0003_create_units"
        )

        response = test_client.post("/super-admin/tenants", json=ONBOARD_BODY)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["detail"] == "Failed to onboard tenant"

    def test_missing_admin_is_rejected_before_the_service(
        self, test_client: TestClient, mock_onboarding_service: AsyncMock
    ) -> None:
        body = {k: v for k, v in ONBOARD_BODY.items() if k != "admin"}

        response = test_client.post("/super-admin/tenants", json=body)

        assert response.status_code == 422
        mock_onboarding_service.onboard.assert_not_called()


class TestTenantRecords:
    def test_list_returns_page(
        self, test_client: TestClient, mock_tenant_service: AsyncMock
    ) -> None:
        mock_tenant_service.list_tenants.return_value = ([_tenant()], 1)

        response = test_client.get("/super-admin/tenants?page=2&limit=5")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["total"] == 1
        assert body["page"] == 2
        assert body["tenants"][0]["id"] == 7
        mock_tenant_service.list_tenants.assert_called_once_with(
            page=2, limit=5, active_only=False
        )

    def test_limit_is_capped(self, test_client: TestClient) -> None:
        response = test_client.get("/super-admin/tenants?limit=500")

        assert response.status_code == 422

    def test_get_unknown_tenant_returns_404(
        self, test_client: TestClient, mock_tenant_service: AsyncMock
    ) -> None:
        mock_tenant_service.get_tenant.side_effect = TenantNotFoundError("gone")

        response = test_client.get("/super-admin/tenants/99")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Tenant 99 not found"

    def test_non_numeric_id_returns_400(self, test_client: TestClient) -> None:
        response = test_client.get("/super-admin/tenants/abc")

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_deactivate(
        self, test_client: TestClient, mock_tenant_service: AsyncMock
    ) -> None:
        mock_tenant_service.deactivate_tenant.return_value = _tenant(is_active=False)

        response = test_client.patch("/super-admin/tenants/7/deactivate")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["is_active"] is False
        mock_tenant_service.deactivate_tenant.assert_called_once_with(TenantId(7))

    def test_activate_unknown_tenant_returns_404(
        self, test_client: TestClient, mock_tenant_service: AsyncMock
    ) -> None:
        mock_tenant_service.activate_tenant.side_effect = TenantNotFoundError("gone")

        response = test_client.patch("/super-admin/tenants/8/activate")

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestStats:
    def test_returns_nested_stats(
        self, test_client: TestClient, mock_stats_service: AsyncMock
    ) -> None:
        mock_stats_service.get_stats.return_value = PlatformStats(
            tenants=TenantCounts(total=3, active=2, inactive=1),
            total_projects=4,
            total_units=10,
            available_units=6,
            booked_units=3,
            sold_units=1,
            revenue=Decimal("1000.00"),
            currency="INR",
        )

        response = test_client.get("/super-admin/stats")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["tenants"]["active"] == 2
        assert body["units"]["occupancy_rate"] == 40.0
        assert body["revenue"] == {"total": "1000.00", "currency": "INR"}


class TestPermissions:
    @pytest.fixture
    def request_context(self) -> RequestContext:
        return RequestContext(
            namespace=NamespaceName.for_tenant(7),
            tenant_id=7,
            principal_id=3,
            role=Role.ADMIN.value,
        )

    def test_tenant_admin_cannot_onboard(
        self, test_client: TestClient, mock_onboarding_service: AsyncMock
    ) -> None:
        response = test_client.post("/super-admin/tenants", json=ONBOARD_BODY)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        mock_onboarding_service.onboard.assert_not_called()

    def test_tenant_admin_cannot_read_stats(self, test_client: TestClient) -> None:
        response = test_client.get("/super-admin/stats")

        assert response.status_code == status.HTTP_403_FORBIDDEN
