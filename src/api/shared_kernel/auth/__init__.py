"""Authentication shared kernel module."""

from shared_kernel.auth.observability import (
    DefaultJWTValidatorProbe,
    JWTValidatorProbe,
)
from shared_kernel.auth.passwords import BcryptPasswordHasher, PasswordHasher
from shared_kernel.auth.tokens import (
    InvalidTokenError,
    IssuedToken,
    JWTValidator,
    TokenClaims,
    TokenIssuer,
)

__all__ = [
    "BcryptPasswordHasher",
    "DefaultJWTValidatorProbe",
    "InvalidTokenError",
    "IssuedToken",
    "JWTValidator",
    "JWTValidatorProbe",
    "PasswordHasher",
    "TokenClaims",
    "TokenIssuer",
]
