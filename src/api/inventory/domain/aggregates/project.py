"""Project aggregate."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from inventory.domain.value_objects import ProjectStatus
from shared_kernel.validation import ValidationError, validate_display_name

LOCATION_MAX_LENGTH = 500
DESCRIPTION_MAX_LENGTH = 2000


def _status(value: str | ProjectStatus) -> ProjectStatus:
    try:
        return ProjectStatus(value)
    except ValueError as e:
        allowed = ", ".join(s.value for s in ProjectStatus)
        raise ValidationError(f"Status must be one of: {allowed}") from e


def _location(value: str) -> str:
    location = validate_display_name(value, "Location")
    if len(location) > LOCATION_MAX_LENGTH:
        raise ValidationError(
            f"Location cannot exceed {LOCATION_MAX_LENGTH} characters"
        )
    return location


def _description(value: str | None) -> str | None:
    if value is None:
        return None
    if len(value) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(
            f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters"
        )
    return value


def _total_units(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValidationError("Total units must be a non-negative integer")
    return value


@dataclass
class Project:
    """A building project of one tenant.

    Projects are soft-deleted by clearing ``is_active``.
    """

    name: str
    location: str
    description: str | None = None
    total_units: int = 0
    status: ProjectStatus = ProjectStatus.PLANNING
    is_active: bool = True
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def create(
        cls,
        name: str,
        location: str,
        description: str | None = None,
        total_units: int = 0,
        status: str | ProjectStatus = ProjectStatus.PLANNING,
    ) -> Project:
        """Create a validated project.

        Raises:
            ValidationError: If any field violates its rule
        """
        return cls(
            name=validate_display_name(name, "Project name"),
            location=_location(location),
            description=_description(description),
            total_units=_total_units(total_units),
            status=_status(status),
        )

    def update(self, **changes: Any) -> dict[str, Any]:
        """Apply the given field changes.

        Returns:
            The previous values of the fields that changed

        Raises:
            ValidationError: If a value violates its rule or the field is unknown
        """
        validators = {
            "name": lambda v: validate_display_name(v, "Project name"),
            "location": _location,
            "description": _description,
            "total_units": _total_units,
            "status": _status,
            "is_active": bool,
        }
        previous: dict[str, Any] = {}
        for field_name, value in changes.items():
            if field_name not in validators:
                raise ValidationError(f"Unknown project field: {field_name}")
            new_value = validators[field_name](value)
            if getattr(self, field_name) != new_value:
                previous[field_name] = getattr(self, field_name)
                setattr(self, field_name, new_value)
        return previous

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "location": self.location,
            "description": self.description,
            "total_units": self.total_units,
            "status": self.status,
            "is_active": self.is_active,
        }
