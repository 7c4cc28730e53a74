"""Authentication service.

Platform administrators log in against the root namespace. Tenant users
do not know their namespace at login, so they are located with the
cross-namespace lookup. Every credential failure raises the same
``InvalidCredentialsError`` so callers cannot probe which identifiers exist.
"""

from __future__ import annotations

from typing import Callable

from iam.application.observability import (
    AuthenticationProbe,
    DefaultAuthenticationProbe,
)
from iam.application.value_objects import AuthenticatedSession
from iam.domain.aggregates import Principal
from iam.ports.exceptions import InactivePrincipalError, InvalidCredentialsError
from iam.ports.repositories import IPlatformUserRepository, IPrincipalRepository
from shared_kernel.auth import PasswordHasher, TokenIssuer
from shared_kernel.middleware import RequestContext
from shared_kernel.namespaces import NamespaceName
from tenancy.application.cross_namespace_lookup import CrossNamespaceLookup

INVALID_CREDENTIALS = "Invalid credentials"
ACCOUNT_DEACTIVATED = "Account is deactivated"

# Cost-12 bcrypt hash matching no credential, verified on every unknown login.
UNKNOWN_PRINCIPAL_HASH = "$2b$12$DCq7YPn5Rq63x1Lad4cll.TV4S6ytwfsfvkgY8jIucDrjc8deX1s."


class AuthService:
    """Application service for login and token refresh."""

    def __init__(
        self,
        platform_user_repository: IPlatformUserRepository,
        lookup: CrossNamespaceLookup,
        principal_repository_factory: Callable[[NamespaceName], IPrincipalRepository],
        password_hasher: PasswordHasher,
        token_issuer: TokenIssuer,
        probe: AuthenticationProbe | None = None,
    ):
        self._platform_users = platform_user_repository
        self._lookup = lookup
        self._principal_repository_factory = principal_repository_factory
        self._password_hasher = password_hasher
        self._token_issuer = token_issuer
        self._probe = probe or DefaultAuthenticationProbe()

    async def platform_login(self, email: str, password: str) -> AuthenticatedSession:
        """Authenticate a platform administrator.

        Raises:
            InvalidCredentialsError: Unknown email, wrong password or wrong role
            InactivePrincipalError: The account is deactivated
        """
        root = NamespaceName.root()
        principal = await self._platform_users.get_by_email(email)
        if principal is None or not principal.is_platform_admin:
            self._password_hasher.verify(password, UNKNOWN_PRINCIPAL_HASH)
            self._probe.login_failed("unknown_principal", root.value)
            raise InvalidCredentialsError(INVALID_CREDENTIALS)

        self._check_password(principal, password, root)
        return self._issue(principal, root)

    async def tenant_login(self, email: str, password: str) -> AuthenticatedSession:
        """Authenticate a tenant user in whichever active namespace holds the email.

        Raises:
            InvalidCredentialsError: Not found in any active tenant, or wrong password
            InactivePrincipalError: The account is deactivated
        """
        location = await self._lookup.find_by_login(email)
        if location is None:
            self._password_hasher.verify(password, UNKNOWN_PRINCIPAL_HASH)
            self._probe.login_failed("unknown_principal")
            raise InvalidCredentialsError(INVALID_CREDENTIALS)

        self._check_password(location.principal, password, location.namespace)
        return self._issue(location.principal, location.namespace)

    async def refresh(self, context: RequestContext) -> AuthenticatedSession:
        """Re-issue a token for the principal of a resolved request.

        Raises:
            InvalidCredentialsError: The principal no longer exists or is inactive
        """
        if context.is_root:
            principal = await self._platform_users.get_by_id(context.principal_id)
        else:
            principals = self._principal_repository_factory(context.namespace)
            principal = await principals.get_by_id(context.principal_id)

        if principal is None or not principal.is_active:
            self._probe.login_failed("refresh_rejected", context.namespace.value)
            raise InvalidCredentialsError("User not found or inactive")

        session = self._issue(principal, context.namespace, login=False)
        self._probe.token_refreshed(principal.id, context.namespace.value)
        return session

    def _check_password(
        self, principal: Principal, password: str, namespace: NamespaceName
    ) -> None:
        if not self._password_hasher.verify(password, principal.password_hash):
            self._probe.login_failed("wrong_password", namespace.value)
            raise InvalidCredentialsError(INVALID_CREDENTIALS)
        if not principal.is_active:
            self._probe.login_failed("inactive_principal", namespace.value)
            raise InactivePrincipalError(ACCOUNT_DEACTIVATED)

    def _issue(
        self, principal: Principal, namespace: NamespaceName, login: bool = True
    ) -> AuthenticatedSession:
        token = self._token_issuer.issue(
            principal_id=principal.id,
            role=principal.role.value,
            email=principal.email,
            tenant_id=None if namespace.is_root else principal.tenant_id,
            namespace=None if namespace.is_root else namespace.value,
        )
        if login:
            self._probe.login_succeeded(
                principal.id, namespace.value, principal.tenant_id
            )
        return AuthenticatedSession(
            token=token, principal=principal, namespace=namespace
        )
