"""Role permission checks for route handlers."""

from typing import Annotated, Any, Callable, Coroutine

from fastapi import Depends, HTTPException, status

from iam.domain.value_objects import Action, Resource, has_permission
from shared_kernel.middleware import RequestContext
from tenancy.dependencies.request_context import get_request_context


def require_permission(
    resource: Resource, action: Action
) -> Callable[..., Coroutine[Any, Any, RequestContext]]:
    """Build a dependency that admits only roles allowed ``action`` on ``resource``.

    Resolution runs first, so a suspended tenant is rejected before the
    permission check.

    Usage:
        @router.post("/projects")
        async def create_project(
            context: Annotated[
                RequestContext,
                Depends(require_permission(Resource.PROJECTS, Action.CREATE)),
            ],
        ): ...
    """

    async def _check(
        context: Annotated[RequestContext, Depends(get_request_context)],
    ) -> RequestContext:
        if not has_permission(context.role, resource, action):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return context

    return _check
