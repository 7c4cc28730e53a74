"""Pydantic models for platform administrator requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from iam.domain.aggregates import Principal
from tenancy.application.value_objects import OnboardedTenant, PlatformStats
from tenancy.domain.aggregates import Tenant


class AdminUserRequest(BaseModel):
    """Initial administrator of a new tenant."""

    name: str = Field(..., description="Administrator display name")
    email: str = Field(..., description="Administrator login email")
    password: str = Field(..., description="Administrator password", repr=False)


class CreateTenantRequest(BaseModel):
    """Request model for onboarding a tenant."""

    name: str = Field(..., description="Tenant display name")
    contact: str = Field(..., description="Tenant contact email")
    subscription_type: str = Field(
        default="Basic", description="Subscription tier (Basic or Premium)"
    )
    admin: AdminUserRequest


class UpdateTenantRequest(BaseModel):
    """Request model for updating tenant metadata."""

    name: str | None = None
    contact: str | None = None
    subscription_type: str | None = None


class TenantResponse(BaseModel):
    """Response model for a tenant record."""

    id: int
    name: str
    contact: str
    subscription_type: str
    namespace: str | None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, tenant: Tenant) -> TenantResponse:
        return cls(
            id=tenant.id.value,
            name=tenant.name,
            contact=tenant.contact,
            subscription_type=tenant.subscription_tier.value,
            namespace=tenant.namespace.value if tenant.namespace else None,
            is_active=tenant.is_active,
            created_at=tenant.created_at,
            updated_at=tenant.updated_at,
        )


class AdminUserResponse(BaseModel):
    """The administrator created during onboarding."""

    id: int
    name: str
    email: str
    role: str

    @classmethod
    def from_domain(cls, principal: Principal) -> AdminUserResponse:
        return cls(
            id=principal.id,
            name=principal.name,
            email=principal.email,
            role=principal.role.value,
        )


class OnboardedTenantResponse(BaseModel):
    """Response model for a successful onboarding."""

    tenant: TenantResponse
    admin: AdminUserResponse

    @classmethod
    def from_domain(cls, result: OnboardedTenant) -> OnboardedTenantResponse:
        return cls(
            tenant=TenantResponse.from_domain(result.tenant),
            admin=AdminUserResponse.from_domain(result.admin),
        )


class TenantListResponse(BaseModel):
    """A page of tenant records."""

    tenants: list[TenantResponse]
    total: int
    page: int
    limit: int


class TenantCountsResponse(BaseModel):
    total: int
    active: int
    inactive: int


class ProjectStatsResponse(BaseModel):
    total: int


class UnitStatsResponse(BaseModel):
    total: int
    available: int
    booked: int
    sold: int
    occupancy_rate: float = Field(..., description="Percentage booked or sold")


class RevenueResponse(BaseModel):
    total: str
    currency: str


class PlatformStatsResponse(BaseModel):
    """Statistics aggregated over every active tenant."""

    tenants: TenantCountsResponse
    projects: ProjectStatsResponse
    units: UnitStatsResponse
    revenue: RevenueResponse

    @classmethod
    def from_domain(cls, stats: PlatformStats) -> PlatformStatsResponse:
        return cls(
            tenants=TenantCountsResponse(
                total=stats.tenants.total,
                active=stats.tenants.active,
                inactive=stats.tenants.inactive,
            ),
            projects=ProjectStatsResponse(total=stats.total_projects),
            units=UnitStatsResponse(
                total=stats.total_units,
                available=stats.available_units,
                booked=stats.booked_units,
                sold=stats.sold_units,
                occupancy_rate=stats.occupancy_rate,
            ),
            revenue=RevenueResponse(
                total=str(stats.revenue), currency=stats.currency
            ),
        )
