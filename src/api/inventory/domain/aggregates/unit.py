"""Unit aggregate."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from inventory.domain.value_objects import UnitStatus
from shared_kernel.validation import ValidationError

UNIT_NUMBER_MAX_LENGTH = 100


def _unit_number(value: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Unit number is required")
    number = value.strip()
    if len(number) > UNIT_NUMBER_MAX_LENGTH:
        raise ValidationError(
            f"Unit number cannot exceed {UNIT_NUMBER_MAX_LENGTH} characters"
        )
    return number


def _positive_decimal(value: Any, label: str) -> Decimal:
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValidationError(f"{label} must be a number") from e
    if not number.is_finite() or number <= 0:
        raise ValidationError(f"{label} must be positive")
    return number


def _optional_count(value: int | None, label: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValidationError(f"{label} must be a non-negative integer")
    return value


def _floor(value: int | None) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("Floor must be an integer")
    return value


@dataclass
class Unit:
    """A sellable unit within a project.

    Business rules:
    - Only an Available unit can be booked
    - Booked and Available units can be sold; selling a Sold unit is a no-op
    - Units are soft-deleted by clearing ``is_active``
    """

    project_id: int
    unit_number: str
    area: Decimal
    price: Decimal
    floor: int | None = None
    bedrooms: int | None = None
    bathrooms: int | None = None
    status: UnitStatus = UnitStatus.AVAILABLE
    booked_by: int | None = None
    booked_at: datetime | None = None
    sold_at: datetime | None = None
    is_active: bool = True
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def create(
        cls,
        project_id: int,
        unit_number: str,
        area: Decimal | float | int | str,
        price: Decimal | float | int | str,
        floor: int | None = None,
        bedrooms: int | None = None,
        bathrooms: int | None = None,
    ) -> Unit:
        """Create a validated, available unit.

        Raises:
            ValidationError: If any field violates its rule
        """
        if (
            isinstance(project_id, bool)
            or not isinstance(project_id, int)
            or project_id < 1
        ):
            raise ValidationError("Project ID must be a positive integer")
        return cls(
            project_id=project_id,
            unit_number=_unit_number(unit_number),
            area=_positive_decimal(area, "Area"),
            price=_positive_decimal(price, "Price"),
            floor=_floor(floor),
            bedrooms=_optional_count(bedrooms, "Bedrooms"),
            bathrooms=_optional_count(bathrooms, "Bathrooms"),
        )

    @property
    def is_available(self) -> bool:
        return self.status is UnitStatus.AVAILABLE

    def update(self, **changes: Any) -> dict[str, Any]:
        """Apply the given field changes. Status changes go through booking.

        Returns:
            The previous values of the fields that changed

        Raises:
            ValidationError: If a value violates its rule or the field is unknown
        """
        validators = {
            "unit_number": _unit_number,
            "area": lambda v: _positive_decimal(v, "Area"),
            "price": lambda v: _positive_decimal(v, "Price"),
            "floor": _floor,
            "bedrooms": lambda v: _optional_count(v, "Bedrooms"),
            "bathrooms": lambda v: _optional_count(v, "Bathrooms"),
            "is_active": bool,
        }
        previous: dict[str, Any] = {}
        for field_name, value in changes.items():
            if field_name not in validators:
                raise ValidationError(f"Unknown unit field: {field_name}")
            new_value = validators[field_name](value)
            if getattr(self, field_name) != new_value:
                previous[field_name] = getattr(self, field_name)
                setattr(self, field_name, new_value)
        return previous

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "project_id": self.project_id,
            "unit_number": self.unit_number,
            "floor": self.floor,
            "area": self.area,
            "bedrooms": self.bedrooms,
            "bathrooms": self.bathrooms,
            "price": self.price,
            "status": self.status,
            "booked_by": self.booked_by,
            "booked_at": self.booked_at,
            "sold_at": self.sold_at,
            "is_active": self.is_active,
        }
