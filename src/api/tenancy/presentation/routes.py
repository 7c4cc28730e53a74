"""HTTP routes for tenant administration and platform statistics."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from iam.dependencies.authorization import require_permission
from iam.domain.value_objects import Action, Resource
from shared_kernel.middleware import RequestContext
from tenancy.application.services import (
    PlatformStatsService,
    TenantOnboardingService,
    TenantService,
)
from tenancy.application.value_objects import AdminCredentials
from tenancy.dependencies.tenant import (
    get_onboarding_service,
    get_platform_stats_service,
    get_tenant_service,
)
from tenancy.domain.exceptions import TenantNotFoundError, ValidationError
from tenancy.domain.value_objects import TenantId
from tenancy.ports.exceptions import NamespaceCollisionError, ProvisioningError
from tenancy.presentation.models import (
    CreateTenantRequest,
    OnboardedTenantResponse,
    PlatformStatsResponse,
    TenantListResponse,
    TenantResponse,
    UpdateTenantRequest,
)

router = APIRouter()


def _parse_tenant_id(tenant_id: str) -> TenantId:
    try:
        return TenantId.from_string(tenant_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid tenant ID: {tenant_id}",
        ) from e


def _not_found(tenant_id: TenantId) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Tenant {tenant_id} not found",
    )


@router.post("/tenants", status_code=status.HTTP_201_CREATED)
async def create_tenant(
    request: CreateTenantRequest,
    _: Annotated[
        RequestContext, Depends(require_permission(Resource.TENANTS, Action.CREATE))
    ],
    service: Annotated[TenantOnboardingService, Depends(get_onboarding_service)],
) -> OnboardedTenantResponse:
    """Onboard a tenant with its namespace and first administrator.

    Raises:
        HTTPException: 400 if any input is invalid
        HTTPException: 500 if the namespace could not be provisioned
    """
    try:
        result = await service.onboard(
            name=request.name,
            contact=request.contact,
            subscription_tier=request.subscription_type,
            admin=AdminCredentials(
                name=request.admin.name,
                email=request.admin.email,
                password=request.admin.password,
            ),
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except (ProvisioningError, NamespaceCollisionError):
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to onboard tenant",
        )
    return OnboardedTenantResponse.from_domain(result)


@router.get("/tenants")
async def list_tenants(
    _: Annotated[
        RequestContext, Depends(require_permission(Resource.TENANTS, Action.READ))
    ],
    service: Annotated[TenantService, Depends(get_tenant_service)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
    active_only: bool = False,
) -> TenantListResponse:
    tenants, total = await service.list_tenants(
        page=page, limit=limit, active_only=active_only
    )
    return TenantListResponse(
        tenants=[TenantResponse.from_domain(t) for t in tenants],
        total=total,
        page=page,
        limit=limit,
    )


@router.get("/tenants/{tenant_id}")
async def get_tenant(
    tenant_id: str,
    _: Annotated[
        RequestContext, Depends(require_permission(Resource.TENANTS, Action.READ))
    ],
    service: Annotated[TenantService, Depends(get_tenant_service)],
) -> TenantResponse:
    tenant_id_obj = _parse_tenant_id(tenant_id)
    try:
        tenant = await service.get_tenant(tenant_id_obj)
    except TenantNotFoundError:
        raise _not_found(tenant_id_obj)
    return TenantResponse.from_domain(tenant)


@router.patch("/tenants/{tenant_id}")
async def update_tenant(
    tenant_id: str,
    request: UpdateTenantRequest,
    _: Annotated[
        RequestContext, Depends(require_permission(Resource.TENANTS, Action.UPDATE))
    ],
    service: Annotated[TenantService, Depends(get_tenant_service)],
) -> TenantResponse:
    """Update tenant metadata. The namespace cannot be changed."""
    tenant_id_obj = _parse_tenant_id(tenant_id)
    try:
        tenant = await service.update_tenant(
            tenant_id_obj,
            name=request.name,
            contact=request.contact,
            subscription_tier=request.subscription_type,
        )
    except TenantNotFoundError:
        raise _not_found(tenant_id_obj)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return TenantResponse.from_domain(tenant)


@router.patch("/tenants/{tenant_id}/activate")
async def activate_tenant(
    tenant_id: str,
    _: Annotated[
        RequestContext,
        Depends(require_permission(Resource.TENANTS, Action.ACTIVATE)),
    ],
    service: Annotated[TenantService, Depends(get_tenant_service)],
) -> TenantResponse:
    tenant_id_obj = _parse_tenant_id(tenant_id)
    try:
        tenant = await service.activate_tenant(tenant_id_obj)
    except TenantNotFoundError:
        raise _not_found(tenant_id_obj)
    return TenantResponse.from_domain(tenant)


@router.patch("/tenants/{tenant_id}/deactivate")
async def deactivate_tenant(
    tenant_id: str,
    _: Annotated[
        RequestContext,
        Depends(require_permission(Resource.TENANTS, Action.DEACTIVATE)),
    ],
    service: Annotated[TenantService, Depends(get_tenant_service)],
) -> TenantResponse:
    """Deactivate a tenant; its users are rejected from their next request."""
    tenant_id_obj = _parse_tenant_id(tenant_id)
    try:
        tenant = await service.deactivate_tenant(tenant_id_obj)
    except TenantNotFoundError:
        raise _not_found(tenant_id_obj)
    return TenantResponse.from_domain(tenant)


@router.get("/stats")
async def get_stats(
    _: Annotated[
        RequestContext, Depends(require_permission(Resource.STATS, Action.READ))
    ],
    service: Annotated[PlatformStatsService, Depends(get_platform_stats_service)],
) -> PlatformStatsResponse:
    stats = await service.get_stats()
    return PlatformStatsResponse.from_domain(stats)
