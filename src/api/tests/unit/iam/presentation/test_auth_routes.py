"""Unit tests for login and refresh routes."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from iam.application.services import AuthService
from iam.application.value_objects import AuthenticatedSession
from iam.domain.aggregates import Principal
from iam.domain.value_objects import Role
from iam.ports.exceptions import InactivePrincipalError, InvalidCredentialsError
from shared_kernel.auth import IssuedToken
from shared_kernel.middleware import RequestContext
from shared_kernel.namespaces import NamespaceName

CREDENTIALS = {"email": "ada@acme.com", "password": "correct-horse"}


def _session() -> AuthenticatedSession:
    principal = Principal(
        id=5,
        name="Ada",
        email="ada@acme.com",
        password_hash="hashed",
        role=Role.SALES,
        tenant_id=7,
    )
    return AuthenticatedSession(
        token=IssuedToken(access_token="signed.jwt.token", expires_in=86400),
        principal=principal,
        namespace=NamespaceName.for_tenant(7),
    )


@pytest.fixture
def mock_auth_service() -> AsyncMock:
    return AsyncMock(spec=AuthService)


@pytest.fixture
def test_client(mock_auth_service: AsyncMock) -> TestClient:
    from iam.dependencies.user import get_auth_service
    from iam.presentation import router
    from tenancy.dependencies.request_context import get_request_context

    app = FastAPI()
    app.dependency_overrides[get_auth_service] = lambda: mock_auth_service
    app.dependency_overrides[get_request_context] = lambda: RequestContext(
        namespace=NamespaceName.for_tenant(7),
        tenant_id=7,
        principal_id=5,
        role="Sales",
    )
    app.include_router(router)
    return TestClient(app)


class TestTenantLogin:
    def test_returns_token_and_user(
        self, test_client: TestClient, mock_auth_service: AsyncMock
    ) -> None:
        mock_auth_service.tenant_login.return_value = _session()

        response = test_client.post("/auth/login", json=CREDENTIALS)

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["access_token"] == "signed.jwt.token"
        assert body["token_type"] == "bearer"
        assert body["user"] == {
            "id": 5,
            "name": "Ada",
            "email": "ada@acme.com",
            "role": "Sales",
            "tenant_id": 7,
        }
        mock_auth_service.tenant_login.assert_called_once_with(
            "ada@acme.com", "correct-horse"
        )

    def test_bad_credentials_return_401(
        self, test_client: TestClient, mock_auth_service: AsyncMock
    ) -> None:
        mock_auth_service.tenant_login.side_effect = InvalidCredentialsError(
            "Invalid credentials"
        )

        response = test_client.post("/auth/login", json=CREDENTIALS)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Invalid credentials"
        assert response.headers["www-authenticate"] == "Bearer"

    def test_deactivated_account_returns_403(
        self, test_client: TestClient, mock_auth_service: AsyncMock
    ) -> None:
        mock_auth_service.tenant_login.side_effect = InactivePrincipalError(
            "Account is deactivated"
        )

        response = test_client.post("/auth/login", json=CREDENTIALS)

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestPlatformLogin:
    def test_uses_platform_login(
        self, test_client: TestClient, mock_auth_service: AsyncMock
    ) -> None:
        mock_auth_service.platform_login.return_value = _session()

        response = test_client.post("/auth/super-admin/login", json=CREDENTIALS)

        assert response.status_code == status.HTTP_200_OK
        mock_auth_service.tenant_login.assert_not_called()


class TestRefresh:
    def test_refreshes_for_resolved_context(
        self, test_client: TestClient, mock_auth_service: AsyncMock
    ) -> None:
        mock_auth_service.refresh.return_value = _session()

        response = test_client.post("/auth/refresh")

        assert response.status_code == status.HTTP_200_OK
        context = mock_auth_service.refresh.call_args.args[0]
        assert context.principal_id == 5
