"""Value objects for the inventory domain."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum


class ProjectStatus(StrEnum):
    """Construction state of a project."""

    PLANNING = "Planning"
    UNDER_CONSTRUCTION = "Under Construction"
    COMPLETED = "Completed"
    ON_HOLD = "On Hold"


class UnitStatus(StrEnum):
    """Sales state of a unit: Available, then Booked, then Sold."""

    AVAILABLE = "Available"
    BOOKED = "Booked"
    SOLD = "Sold"


@dataclass(frozen=True)
class UnitFilter:
    """Criteria for listing units."""

    project_id: int | None = None
    status: UnitStatus | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    bedrooms: int | None = None
    active_only: bool = False


@dataclass(frozen=True)
class InventorySummary:
    """Aggregate inventory figures of one namespace."""

    active_projects: int
    total_units: int
    available_units: int
    booked_units: int
    sold_units: int
    revenue: Decimal
