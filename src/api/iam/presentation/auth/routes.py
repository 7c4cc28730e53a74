"""HTTP routes for login and token refresh."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from iam.application.services import AuthService
from iam.dependencies.user import get_auth_service
from iam.ports.exceptions import InactivePrincipalError, InvalidCredentialsError
from iam.presentation.auth.models import LoginRequest, TokenResponse
from shared_kernel.middleware import RequestContext
from tenancy.dependencies.request_context import get_request_context

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)

_UNAUTHORIZED_HEADERS = {"WWW-Authenticate": "Bearer"}


def _login_error(error: Exception) -> HTTPException:
    if isinstance(error, InactivePrincipalError):
        return HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(error),
        )
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=str(error),
        headers=_UNAUTHORIZED_HEADERS,
    )


@router.post("/super-admin/login")
async def platform_login(
    request: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenResponse:
    """Authenticate a platform administrator against the root namespace."""
    try:
        session = await service.platform_login(request.email, request.password)
    except (InvalidCredentialsError, InactivePrincipalError) as e:
        raise _login_error(e) from e
    return TokenResponse.from_domain(session)


@router.post("/login")
async def tenant_login(
    request: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenResponse:
    """Authenticate a tenant user.

    The caller does not name a tenant: the owning namespace is located by
    searching the namespaces of active tenants for the email.

    Raises:
        HTTPException: 401 if the credentials do not match
        HTTPException: 403 if the account is deactivated
    """
    try:
        session = await service.tenant_login(request.email, request.password)
    except (InvalidCredentialsError, InactivePrincipalError) as e:
        raise _login_error(e) from e
    return TokenResponse.from_domain(session)


@router.post("/refresh")
async def refresh_token(
    context: Annotated[RequestContext, Depends(get_request_context)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenResponse:
    """Issue a fresh token for the principal of a still-valid token."""
    try:
        session = await service.refresh(context)
    except (InvalidCredentialsError, InactivePrincipalError) as e:
        raise _login_error(e) from e
    return TokenResponse.from_domain(session)
