"""Access token issuance and validation.

Tokens are HMAC-signed JWTs carrying the claim consumed by namespace
resolution: principal id, role and, for tenant principals, the tenant id
and namespace name. The claim is a hint; the tenant it names is
re-validated on every request.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any

from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError

if TYPE_CHECKING:
    from shared_kernel.auth.observability import JWTValidatorProbe


@dataclass(frozen=True)
class TokenClaims:
    """Validated JWT claims.

    ``tenant_id`` and ``namespace`` are passed through exactly as found in
    the token. Whether they form a usable pair is decided by the resolver.
    """

    principal_id: int
    role: str
    email: str | None = None
    tenant_id: int | None = None
    namespace: str | None = None


@dataclass(frozen=True)
class IssuedToken:
    """A freshly signed access token."""

    access_token: str
    expires_in: int
    token_type: str = "bearer"


class InvalidTokenError(Exception):
    """Raised when JWT validation fails."""

    pass


class TokenIssuer:
    """Signs access tokens for authenticated principals."""

    def __init__(
        self,
        secret: str,
        algorithm: str,
        issuer: str,
        ttl: timedelta = timedelta(hours=24),
    ):
        self._secret = secret
        self._algorithm = algorithm
        self._issuer = issuer
        self._ttl = ttl

    def issue(
        self,
        principal_id: int,
        role: str,
        email: str | None = None,
        tenant_id: int | None = None,
        namespace: str | None = None,
    ) -> IssuedToken:
        """Sign a token for a principal.

        Args:
            principal_id: Identity of the principal within its namespace
            role: The principal's role
            email: Login identifier (informational)
            tenant_id: Owning tenant, omitted for platform administrators
            namespace: Owning namespace, omitted for platform administrators

        Returns:
            IssuedToken with the encoded JWT and its lifetime in seconds
        """
        now = datetime.now(tz=timezone.utc)
        payload: dict[str, Any] = {
            "sub": str(principal_id),
            "role": role,
            "iss": self._issuer,
            "iat": now,
            "exp": now + self._ttl,
        }
        if email is not None:
            payload["email"] = email
        if tenant_id is not None:
            payload["tenant_id"] = tenant_id
        if namespace is not None:
            payload["namespace"] = namespace

        token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        return IssuedToken(
            access_token=token,
            expires_in=int(self._ttl.total_seconds()),
        )


class JWTValidator:
    """Validates access tokens signed by ``TokenIssuer``.

    Validates token signature, expiry and issuer, then extracts the claim.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str,
        issuer: str,
        probe: JWTValidatorProbe,
    ):
        """Initialize the JWT validator.

        Args:
            secret: Shared HMAC secret
            algorithm: Expected signing algorithm
            issuer: Expected iss claim
            probe: Observability probe for logging events
        """
        self._secret = secret
        self._algorithm = algorithm
        self._issuer = issuer
        self._probe = probe

    async def validate_token(self, token: str) -> TokenClaims:
        """Validate JWT and return claims.

        Args:
            token: The JWT token string.

        Returns:
            TokenClaims containing the validated claims.

        Raises:
            InvalidTokenError: If token is invalid, expired, or verification fails.
        """
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                issuer=self._issuer,
                options={
                    "verify_signature": True,
                    "verify_iss": True,
                    "verify_exp": True,
                    "verify_iat": True,
                    "verify_aud": False,
                },
            )
        except ExpiredSignatureError as e:
            self._probe.access_token_rejected(reason="Token expired")
            raise InvalidTokenError("Token has expired") from e
        except JWTClaimsError as e:
            self._probe.access_token_rejected(reason=f"Claims error: {e}")
            raise InvalidTokenError(f"Invalid token claims: {e}") from e
        except JWTError as e:
            self._probe.access_token_rejected(reason=f"JWT error: {e}")
            raise InvalidTokenError(f"Invalid token: {e}") from e

        principal_id = _as_int(claims.get("sub"))
        if principal_id is None:
            self._probe.access_token_rejected(reason="Missing or invalid sub claim")
            raise InvalidTokenError("Missing required claim: sub")

        role = claims.get("role")
        if not isinstance(role, str) or not role:
            self._probe.access_token_rejected(reason="Missing role claim")
            raise InvalidTokenError("Missing required claim: role")

        tenant_id: int | None = None
        if claims.get("tenant_id") is not None:
            tenant_id = _as_int(claims["tenant_id"])
            if tenant_id is None:
                self._probe.access_token_rejected(reason="Invalid tenant_id claim")
                raise InvalidTokenError("Invalid claim: tenant_id")

        namespace = claims.get("namespace")
        if namespace is not None and not isinstance(namespace, str):
            self._probe.access_token_rejected(reason="Invalid namespace claim")
            raise InvalidTokenError("Invalid claim: namespace")

        email = claims.get("email")

        self._probe.access_token_accepted(
            principal_id=str(principal_id), role=role, namespace=namespace
        )

        return TokenClaims(
            principal_id=principal_id,
            role=role,
            email=str(email) if email is not None else None,
            tenant_id=tenant_id,
            namespace=namespace,
        )


def _as_int(value: Any) -> int | None:
    """Interpret a claim value as a positive integer id."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, str) and value.isdigit():
        parsed = int(value)
        return parsed if parsed > 0 else None
    return None
