"""Request context resolution for FastAPI routes.

Every route touching tenant data depends on ``get_request_context`` (or
on ``get_scoped_session``, which depends on it). Resolution failures end
the request before any repository is constructed.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from iam.dependencies.authentication import get_token_claims
from infrastructure.database.dependencies import get_session
from infrastructure.database.scoping import ScopedSession
from shared_kernel.auth import TokenClaims
from shared_kernel.middleware import RequestContext
from tenancy.application.namespace_resolver import NamespaceResolver
from tenancy.dependencies.tenant import get_namespace_resolver
from tenancy.domain.exceptions import (
    MalformedContextError,
    TenantNotFoundError,
    TenantSuspendedError,
)


async def get_request_context(
    claims: Annotated[TokenClaims, Depends(get_token_claims)],
    resolver: Annotated[NamespaceResolver, Depends(get_namespace_resolver)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> RequestContext:
    """Resolve the namespace of the current request.

    Raises:
        HTTPException 401: The claims do not describe a usable namespace
        HTTPException 403: The tenant does not exist or is suspended;
            both cases share one response
    """
    try:
        context = await resolver.resolve(claims)
    except MalformedContextError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication context",
        )
    except (TenantNotFoundError, TenantSuspendedError):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Tenant access denied",
        )
    finally:
        # Close the read transaction so services can open their own.
        if session.in_transaction():
            await session.commit()

    return context


def get_scoped_session(
    context: Annotated[RequestContext, Depends(get_request_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ScopedSession:
    """Bind the request session to the resolved tenant namespace.

    Raises:
        HTTPException 403: The request resolved to the root namespace
    """
    if context.is_root:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Tenant context required",
        )
    return ScopedSession(session, context.namespace)
