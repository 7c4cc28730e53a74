"""Bearer token extraction and validation."""

from datetime import timedelta
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from iam.application.observability import (
    AuthenticationProbe,
    DefaultAuthenticationProbe,
)
from infrastructure.settings import get_auth_settings
from shared_kernel.auth import (
    BcryptPasswordHasher,
    InvalidTokenError,
    JWTValidator,
    PasswordHasher,
    TokenClaims,
    TokenIssuer,
)
from shared_kernel.auth.observability import DefaultJWTValidatorProbe

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def get_jwt_validator() -> JWTValidator:
    """Get cached JWT validator configured from auth settings."""
    settings = get_auth_settings()
    return JWTValidator(
        secret=settings.jwt_secret.get_secret_value(),
        algorithm=settings.jwt_algorithm,
        issuer=settings.issuer,
        probe=DefaultJWTValidatorProbe(),
    )


@lru_cache
def get_token_issuer() -> TokenIssuer:
    """Get cached token issuer configured from auth settings."""
    settings = get_auth_settings()
    return TokenIssuer(
        secret=settings.jwt_secret.get_secret_value(),
        algorithm=settings.jwt_algorithm,
        issuer=settings.issuer,
        ttl=timedelta(hours=settings.token_ttl_hours),
    )


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return BcryptPasswordHasher()


def get_authentication_probe() -> AuthenticationProbe:
    return DefaultAuthenticationProbe()


async def get_token_claims(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
    validator: Annotated[JWTValidator, Depends(get_jwt_validator)],
) -> TokenClaims:
    """Validate the bearer token of the request.

    Raises:
        HTTPException 401: Missing, malformed, expired or forged token
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return await validator.validate_token(credentials.credentials)
    except InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
