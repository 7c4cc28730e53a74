"""Repository port interfaces for the inventory bounded context.

Implementations are bound to one tenant namespace at construction.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable

from inventory.domain.aggregates import Project, Unit
from inventory.domain.value_objects import (
    InventorySummary,
    ProjectStatus,
    UnitFilter,
)


@runtime_checkable
class IProjectRepository(Protocol):
    """Repository for the projects of one namespace."""

    async def add(self, project: Project) -> Project:
        ...

    async def update(self, project: Project) -> Project:
        ...

    async def get_by_id(self, project_id: int) -> Project | None:
        ...

    async def list(
        self,
        *,
        status: ProjectStatus | None = None,
        active_only: bool = False,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Project]:
        """List projects, newest first."""
        ...

    async def count(
        self,
        *,
        status: ProjectStatus | None = None,
        active_only: bool = False,
    ) -> int:
        ...


@runtime_checkable
class IUnitRepository(Protocol):
    """Repository for the units of one namespace."""

    async def add(self, unit: Unit) -> Unit:
        """Insert a unit.

        Raises:
            DuplicateUnitNumberError: If the project already has this unit number
        """
        ...

    async def update(self, unit: Unit) -> Unit:
        ...

    async def get_by_id(self, unit_id: int) -> Unit | None:
        ...

    async def list(
        self, criteria: UnitFilter, *, limit: int = 10, offset: int = 0
    ) -> list[Unit]:
        """List units ordered by project and unit number."""
        ...

    async def count(self, criteria: UnitFilter) -> int:
        ...

    async def book(
        self, unit_id: int, principal_id: int, booked_at: datetime
    ) -> Unit | None:
        """Book the unit only if it is still Available.

        Returns:
            The booked unit, or None if it was not Available any more
        """
        ...

    async def mark_sold(self, unit_id: int, sold_at: datetime) -> Unit | None:
        """Mark a unit Sold unless it already is.

        Returns:
            The sold unit, or None if it was already Sold
        """
        ...


@runtime_checkable
class IInventorySummaryReader(Protocol):
    """Aggregate figures over the inventory of one namespace."""

    async def summarize(self) -> InventorySummary:
        """Count active projects and active units by status, and sum revenue."""
        ...
