"""HTTP routes for units, including booking and sale."""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from iam.dependencies.authorization import require_permission
from iam.domain.value_objects import Action, Resource
from inventory.application.services import UnitService
from inventory.dependencies import get_unit_service
from inventory.domain.exceptions import (
    DuplicateUnitNumberError,
    ProjectNotFoundError,
    UnitNotAvailableError,
    UnitNotFoundError,
    ValidationError,
)
from inventory.domain.value_objects import UnitFilter, UnitStatus
from inventory.presentation.units.models import (
    CreateUnitRequest,
    UnitListResponse,
    UnitResponse,
    UpdateUnitRequest,
)
from shared_kernel.middleware import RequestContext

router = APIRouter(
    prefix="/units",
    tags=["units"],
)


def _not_found(error: Exception) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_unit(
    request: CreateUnitRequest,
    _: Annotated[
        RequestContext, Depends(require_permission(Resource.UNITS, Action.CREATE))
    ],
    service: Annotated[UnitService, Depends(get_unit_service)],
) -> UnitResponse:
    """Create an available unit in a project.

    Raises:
        HTTPException: 400 if a field is invalid
        HTTPException: 404 if the project does not exist
        HTTPException: 409 if the project already has this unit number
    """
    try:
        unit = await service.create_unit(**request.model_dump())
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ProjectNotFoundError as e:
        raise _not_found(e)
    except DuplicateUnitNumberError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return UnitResponse.from_domain(unit)


@router.get("")
async def list_units(
    _: Annotated[
        RequestContext, Depends(require_permission(Resource.UNITS, Action.READ))
    ],
    service: Annotated[UnitService, Depends(get_unit_service)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
    project_id: int | None = None,
    unit_status: Annotated[UnitStatus | None, Query(alias="status")] = None,
    min_price: Decimal | None = None,
    max_price: Decimal | None = None,
    bedrooms: int | None = None,
    active_only: bool = False,
) -> UnitListResponse:
    criteria = UnitFilter(
        project_id=project_id,
        status=unit_status,
        min_price=min_price,
        max_price=max_price,
        bedrooms=bedrooms,
        active_only=active_only,
    )
    units, total = await service.list_units(criteria, page=page, limit=limit)
    return UnitListResponse(
        units=[UnitResponse.from_domain(u) for u in units],
        total=total,
        page=page,
        limit=limit,
    )


@router.get("/{unit_id}")
async def get_unit(
    unit_id: int,
    _: Annotated[
        RequestContext, Depends(require_permission(Resource.UNITS, Action.READ))
    ],
    service: Annotated[UnitService, Depends(get_unit_service)],
) -> UnitResponse:
    try:
        unit = await service.get_unit(unit_id)
    except UnitNotFoundError as e:
        raise _not_found(e)
    return UnitResponse.from_domain(unit)


@router.patch("/{unit_id}")
async def update_unit(
    unit_id: int,
    request: UpdateUnitRequest,
    _: Annotated[
        RequestContext, Depends(require_permission(Resource.UNITS, Action.UPDATE))
    ],
    service: Annotated[UnitService, Depends(get_unit_service)],
) -> UnitResponse:
    try:
        unit = await service.update_unit(
            unit_id, **request.model_dump(exclude_unset=True)
        )
    except UnitNotFoundError as e:
        raise _not_found(e)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DuplicateUnitNumberError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return UnitResponse.from_domain(unit)


@router.delete("/{unit_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_unit(
    unit_id: int,
    _: Annotated[
        RequestContext, Depends(require_permission(Resource.UNITS, Action.DELETE))
    ],
    service: Annotated[UnitService, Depends(get_unit_service)],
) -> None:
    try:
        await service.delete_unit(unit_id)
    except UnitNotFoundError as e:
        raise _not_found(e)


@router.post("/{unit_id}/book")
async def book_unit(
    unit_id: int,
    context: Annotated[
        RequestContext, Depends(require_permission(Resource.UNITS, Action.BOOK))
    ],
    service: Annotated[UnitService, Depends(get_unit_service)],
) -> UnitResponse:
    """Book an available unit for the calling principal.

    Raises:
        HTTPException: 400 if the unit is not available
        HTTPException: 404 if the unit does not exist
    """
    try:
        unit = await service.book_unit(unit_id, context.principal_id)
    except UnitNotFoundError as e:
        raise _not_found(e)
    except UnitNotAvailableError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return UnitResponse.from_domain(unit)


@router.post("/{unit_id}/sell")
async def sell_unit(
    unit_id: int,
    _: Annotated[
        RequestContext, Depends(require_permission(Resource.UNITS, Action.SELL))
    ],
    service: Annotated[UnitService, Depends(get_unit_service)],
) -> UnitResponse:
    try:
        unit = await service.mark_sold(unit_id)
    except UnitNotFoundError as e:
        raise _not_found(e)
    return UnitResponse.from_domain(unit)
