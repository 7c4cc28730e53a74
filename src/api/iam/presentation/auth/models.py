"""Request and response models for authentication endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from iam.application.value_objects import AuthenticatedSession


class LoginRequest(BaseModel):
    email: str = Field(..., description="Login identifier")
    password: str = Field(..., description="Account password", repr=False)


class SessionUserResponse(BaseModel):
    """The principal a token was issued for."""

    id: int
    name: str
    email: str
    role: str
    tenant_id: int | None = None


class TokenResponse(BaseModel):
    """A signed access token and the principal it identifies."""

    access_token: str
    token_type: str
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: SessionUserResponse

    @classmethod
    def from_domain(cls, session: AuthenticatedSession) -> TokenResponse:
        principal = session.principal
        return cls(
            access_token=session.token.access_token,
            token_type=session.token.token_type,
            expires_in=session.token.expires_in,
            user=SessionUserResponse(
                id=principal.id,
                name=principal.name,
                email=principal.email,
                role=principal.role.value,
                tenant_id=principal.tenant_id,
            ),
        )
