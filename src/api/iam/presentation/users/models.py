"""Request and response models for tenant user management."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from iam.domain.aggregates import Principal


class CreateUserRequest(BaseModel):
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Login identifier, unique per tenant")
    password: str = Field(..., description="Initial password", repr=False)
    role: str = Field(..., description="Admin, Sales or Viewer")


class UpdateUserRequest(BaseModel):
    """Partial update. Passwords are not changed through this endpoint."""

    name: str | None = None
    email: str | None = None
    role: str | None = None
    is_active: bool | None = None


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    role: str
    tenant_id: int | None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, principal: Principal) -> UserResponse:
        return cls(
            id=principal.id,
            name=principal.name,
            email=principal.email,
            role=principal.role.value,
            tenant_id=principal.tenant_id,
            is_active=principal.is_active,
            created_at=principal.created_at,
            updated_at=principal.updated_at,
        )


class UserListResponse(BaseModel):
    users: list[UserResponse]
    total: int
    page: int
    limit: int
