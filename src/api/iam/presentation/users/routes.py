"""HTTP routes for managing the users of the caller's tenant."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from iam.application.services import UserService
from iam.dependencies.authorization import require_permission
from iam.dependencies.user import get_user_service
from iam.domain.value_objects import Action, Resource, Role
from iam.ports.exceptions import DuplicateEmailError, PrincipalNotFoundError
from iam.presentation.users.models import (
    CreateUserRequest,
    UpdateUserRequest,
    UserListResponse,
    UserResponse,
)
from shared_kernel.middleware import RequestContext
from shared_kernel.validation import ValidationError

router = APIRouter(
    prefix="/users",
    tags=["users"],
)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    request: CreateUserRequest,
    _: Annotated[
        RequestContext, Depends(require_permission(Resource.USERS, Action.CREATE))
    ],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Create a user in the caller's tenant.

    Raises:
        HTTPException: 400 if a field is invalid
        HTTPException: 409 if the email is already used in this tenant
    """
    try:
        user = await service.create_user(
            name=request.name,
            email=request.email,
            password=request.password,
            role=request.role,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DuplicateEmailError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return UserResponse.from_domain(user)


@router.get("")
async def list_users(
    _: Annotated[
        RequestContext, Depends(require_permission(Resource.USERS, Action.READ))
    ],
    service: Annotated[UserService, Depends(get_user_service)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
    role: Role | None = None,
    active_only: bool = False,
) -> UserListResponse:
    users, total = await service.list_users(
        page=page, limit=limit, role=role, active_only=active_only
    )
    return UserListResponse(
        users=[UserResponse.from_domain(u) for u in users],
        total=total,
        page=page,
        limit=limit,
    )


@router.get("/{user_id}")
async def get_user(
    user_id: int,
    _: Annotated[
        RequestContext, Depends(require_permission(Resource.USERS, Action.READ))
    ],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    try:
        user = await service.get_user(user_id)
    except PrincipalNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return UserResponse.from_domain(user)


@router.patch("/{user_id}")
async def update_user(
    user_id: int,
    request: UpdateUserRequest,
    _: Annotated[
        RequestContext, Depends(require_permission(Resource.USERS, Action.UPDATE))
    ],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    try:
        user = await service.update_user(
            user_id,
            name=request.name,
            email=request.email,
            role=request.role,
            is_active=request.is_active,
        )
    except PrincipalNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DuplicateEmailError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return UserResponse.from_domain(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    _: Annotated[
        RequestContext, Depends(require_permission(Resource.USERS, Action.DELETE))
    ],
    service: Annotated[UserService, Depends(get_user_service)],
) -> None:
    try:
        await service.delete_user(user_id)
    except PrincipalNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
