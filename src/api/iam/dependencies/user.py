"""Wiring of IAM repositories and services."""

from typing import Annotated, Callable

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from audit.application.audit_trail import AuditTrail
from audit.dependencies import get_audit_trail
from iam.application.observability import AuthenticationProbe
from iam.application.services import AuthService, UserService
from iam.dependencies.authentication import (
    get_authentication_probe,
    get_password_hasher,
    get_token_issuer,
)
from iam.infrastructure.platform_user_repository import PlatformUserRepository
from iam.infrastructure.principal_repository import PrincipalRepository
from iam.ports.repositories import IPrincipalRepository
from infrastructure.database.dependencies import get_session
from infrastructure.database.scoping import ScopedSession
from shared_kernel.auth import PasswordHasher, TokenIssuer
from shared_kernel.middleware import RequestContext
from shared_kernel.namespaces import NamespaceName
from tenancy.application.cross_namespace_lookup import CrossNamespaceLookup
from tenancy.dependencies.request_context import (
    get_request_context,
    get_scoped_session,
)
from tenancy.dependencies.tenant import (
    get_cross_namespace_lookup,
    get_principal_repository_factory,
)


def get_platform_user_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PlatformUserRepository:
    return PlatformUserRepository(session=session)


def get_principal_repository(
    session: Annotated[ScopedSession, Depends(get_scoped_session)],
) -> PrincipalRepository:
    return PrincipalRepository(session=session)


def get_auth_service(
    platform_users: Annotated[
        PlatformUserRepository, Depends(get_platform_user_repository)
    ],
    lookup: Annotated[CrossNamespaceLookup, Depends(get_cross_namespace_lookup)],
    principal_repository_factory: Annotated[
        Callable[[NamespaceName], IPrincipalRepository],
        Depends(get_principal_repository_factory),
    ],
    password_hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    token_issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
    probe: Annotated[AuthenticationProbe, Depends(get_authentication_probe)],
) -> AuthService:
    return AuthService(
        platform_user_repository=platform_users,
        lookup=lookup,
        principal_repository_factory=principal_repository_factory,
        password_hasher=password_hasher,
        token_issuer=token_issuer,
        probe=probe,
    )


def get_user_service(
    context: Annotated[RequestContext, Depends(get_request_context)],
    session: Annotated[ScopedSession, Depends(get_scoped_session)],
    principals: Annotated[PrincipalRepository, Depends(get_principal_repository)],
    audit_trail: Annotated[AuditTrail, Depends(get_audit_trail)],
    password_hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> UserService:
    return UserService(
        principal_repository=principals,
        audit_trail=audit_trail,
        session=session,
        password_hasher=password_hasher,
        tenant_id=context.tenant_id,
    )
