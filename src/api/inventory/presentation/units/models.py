"""Request and response models for units."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from inventory.domain.aggregates import Unit


class CreateUnitRequest(BaseModel):
    project_id: int
    unit_number: str = Field(..., description="Unique within the project")
    area: Decimal = Field(..., description="Floor area")
    price: Decimal
    floor: int | None = None
    bedrooms: int | None = None
    bathrooms: int | None = None


class UpdateUnitRequest(BaseModel):
    """Partial update. Sales state changes through /book and /sell."""

    unit_number: str | None = None
    area: Decimal | None = None
    price: Decimal | None = None
    floor: int | None = None
    bedrooms: int | None = None
    bathrooms: int | None = None
    is_active: bool | None = None


class UnitResponse(BaseModel):
    id: int
    project_id: int
    unit_number: str
    area: Decimal
    price: Decimal
    floor: int | None
    bedrooms: int | None
    bathrooms: int | None
    status: str
    booked_by: int | None
    booked_at: datetime | None
    sold_at: datetime | None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, unit: Unit) -> UnitResponse:
        return cls(
            id=unit.id,
            project_id=unit.project_id,
            unit_number=unit.unit_number,
            area=unit.area,
            price=unit.price,
            floor=unit.floor,
            bedrooms=unit.bedrooms,
            bathrooms=unit.bathrooms,
            status=unit.status.value,
            booked_by=unit.booked_by,
            booked_at=unit.booked_at,
            sold_at=unit.sold_at,
            is_active=unit.is_active,
            created_at=unit.created_at,
            updated_at=unit.updated_at,
        )


class UnitListResponse(BaseModel):
    units: list[UnitResponse]
    total: int
    page: int
    limit: int
