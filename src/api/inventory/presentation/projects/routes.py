"""HTTP routes for projects of the caller's tenant."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from iam.dependencies.authorization import require_permission
from iam.domain.value_objects import Action, Resource
from inventory.application.services import ProjectService
from inventory.dependencies import get_project_service
from inventory.domain.exceptions import ProjectNotFoundError, ValidationError
from inventory.domain.value_objects import ProjectStatus
from inventory.presentation.projects.models import (
    CreateProjectRequest,
    ProjectListResponse,
    ProjectResponse,
    UpdateProjectRequest,
)
from shared_kernel.middleware import RequestContext

router = APIRouter(
    prefix="/projects",
    tags=["projects"],
)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_project(
    request: CreateProjectRequest,
    _: Annotated[
        RequestContext, Depends(require_permission(Resource.PROJECTS, Action.CREATE))
    ],
    service: Annotated[ProjectService, Depends(get_project_service)],
) -> ProjectResponse:
    try:
        project = await service.create_project(
            name=request.name,
            location=request.location,
            description=request.description,
            total_units=request.total_units,
            status=request.status,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return ProjectResponse.from_domain(project)


@router.get("")
async def list_projects(
    _: Annotated[
        RequestContext, Depends(require_permission(Resource.PROJECTS, Action.READ))
    ],
    service: Annotated[ProjectService, Depends(get_project_service)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
    project_status: Annotated[ProjectStatus | None, Query(alias="status")] = None,
    active_only: bool = False,
) -> ProjectListResponse:
    projects, total = await service.list_projects(
        page=page, limit=limit, status=project_status, active_only=active_only
    )
    return ProjectListResponse(
        projects=[ProjectResponse.from_domain(p) for p in projects],
        total=total,
        page=page,
        limit=limit,
    )


@router.get("/{project_id}")
async def get_project(
    project_id: int,
    _: Annotated[
        RequestContext, Depends(require_permission(Resource.PROJECTS, Action.READ))
    ],
    service: Annotated[ProjectService, Depends(get_project_service)],
) -> ProjectResponse:
    try:
        project = await service.get_project(project_id)
    except ProjectNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ProjectResponse.from_domain(project)


@router.patch("/{project_id}")
async def update_project(
    project_id: int,
    request: UpdateProjectRequest,
    _: Annotated[
        RequestContext, Depends(require_permission(Resource.PROJECTS, Action.UPDATE))
    ],
    service: Annotated[ProjectService, Depends(get_project_service)],
) -> ProjectResponse:
    """Update the fields present in the request body."""
    try:
        project = await service.update_project(
            project_id, **request.model_dump(exclude_unset=True)
        )
    except ProjectNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return ProjectResponse.from_domain(project)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: int,
    _: Annotated[
        RequestContext, Depends(require_permission(Resource.PROJECTS, Action.DELETE))
    ],
    service: Annotated[ProjectService, Depends(get_project_service)],
) -> None:
    """Soft delete a project."""
    try:
        await service.delete_project(project_id)
    except ProjectNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
