"""Unit application service: inventory and the booking workflow."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from audit.application.audit_trail import AuditTrail
from audit.domain.audit_entry import AuditAction
from infrastructure.database.scoping import ScopedSession
from inventory.application.observability import (
    DefaultInventoryServiceProbe,
    InventoryServiceProbe,
)
from inventory.domain.aggregates import Unit
from inventory.domain.exceptions import (
    ProjectNotFoundError,
    UnitNotAvailableError,
    UnitNotFoundError,
)
from inventory.domain.value_objects import UnitFilter, UnitStatus
from inventory.ports.repositories import IProjectRepository, IUnitRepository

AUDIT_ENTITY = "unit"


class UnitService:
    """Application service for units."""

    def __init__(
        self,
        unit_repository: IUnitRepository,
        project_repository: IProjectRepository,
        audit_trail: AuditTrail,
        session: ScopedSession,
        probe: InventoryServiceProbe | None = None,
    ):
        self._units = unit_repository
        self._projects = project_repository
        self._audit = audit_trail
        self._session = session
        self._probe = probe or DefaultInventoryServiceProbe()

    @property
    def _namespace(self) -> str:
        return self._session.namespace.value

    async def create_unit(
        self,
        project_id: int,
        unit_number: str,
        area: Decimal,
        price: Decimal,
        floor: int | None = None,
        bedrooms: int | None = None,
        bathrooms: int | None = None,
    ) -> Unit:
        """Create an available unit in an existing project.

        Raises:
            ValidationError: If any field is invalid
            ProjectNotFoundError: If the project does not exist in this namespace
            DuplicateUnitNumberError: If the project already has this unit number
        """
        unit = Unit.create(
            project_id=project_id,
            unit_number=unit_number,
            area=area,
            price=price,
            floor=floor,
            bedrooms=bedrooms,
            bathrooms=bathrooms,
        )
        async with self._session.begin():
            if await self._projects.get_by_id(project_id) is None:
                raise ProjectNotFoundError(f"Project {project_id} not found")
            unit = await self._units.add(unit)
            await self._audit.record(
                AuditAction.CREATE, AUDIT_ENTITY, unit.id, new_values=unit.as_dict()
            )
        self._probe.unit_saved(self._namespace, unit.id)
        return unit

    async def list_units(
        self,
        criteria: UnitFilter,
        *,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[Unit], int]:
        units = await self._units.list(criteria, limit=limit, offset=(page - 1) * limit)
        total = await self._units.count(criteria)
        return units, total

    async def get_unit(self, unit_id: int) -> Unit:
        """Retrieve a unit.

        Raises:
            UnitNotFoundError: If it does not exist in this namespace
        """
        unit = await self._units.get_by_id(unit_id)
        if unit is None:
            raise UnitNotFoundError(f"Unit {unit_id} not found")
        return unit

    async def update_unit(self, unit_id: int, **changes: Any) -> Unit:
        """Update unit fields other than its sales state.

        Raises:
            UnitNotFoundError: If it does not exist in this namespace
            ValidationError: If a value is invalid
            DuplicateUnitNumberError: If the new unit number is taken
        """
        async with self._session.begin():
            unit = await self.get_unit(unit_id)
            previous = unit.update(**changes)
            if not previous:
                return unit

            unit = await self._units.update(unit)
            await self._audit.record(
                AuditAction.UPDATE,
                AUDIT_ENTITY,
                unit.id,
                old_values=previous,
                new_values={key: getattr(unit, key) for key in previous},
            )
        self._probe.unit_saved(self._namespace, unit.id)
        return unit

    async def delete_unit(self, unit_id: int) -> None:
        """Soft delete a unit.

        Raises:
            UnitNotFoundError: If it does not exist in this namespace
        """
        async with self._session.begin():
            unit = await self.get_unit(unit_id)
            old_values = unit.as_dict()
            unit.is_active = False
            await self._units.update(unit)
            await self._audit.record(
                AuditAction.DELETE, AUDIT_ENTITY, unit.id, old_values=old_values
            )
        self._probe.unit_deleted(self._namespace, unit_id)

    async def book_unit(self, unit_id: int, principal_id: int) -> Unit:
        """Book an available unit for a principal.

        Raises:
            UnitNotFoundError: If it does not exist in this namespace
            UnitNotAvailableError: If it is not Available, including when a
                concurrent booking got there first
        """
        async with self._session.begin():
            unit = await self.get_unit(unit_id)
            if not unit.is_available:
                self._probe.booking_rejected(self._namespace, unit_id, unit.status)
                raise UnitNotAvailableError(
                    f"Unit is {unit.status} and cannot be booked"
                )

            booked = await self._units.book(
                unit_id, principal_id, datetime.now(timezone.utc)
            )
            if booked is None:
                self._probe.booking_rejected(self._namespace, unit_id, "conflict")
                raise UnitNotAvailableError(
                    "Failed to book unit. It may have been booked by someone else."
                )

            await self._audit.record(
                AuditAction.BOOK,
                AUDIT_ENTITY,
                unit_id,
                old_values={"status": unit.status},
                new_values={
                    "status": booked.status,
                    "booked_by": booked.booked_by,
                    "booked_at": booked.booked_at,
                },
            )
        self._probe.unit_booked(self._namespace, unit_id, principal_id)
        return booked

    async def mark_sold(self, unit_id: int) -> Unit:
        """Mark a unit sold. Selling a sold unit returns it unchanged.

        Raises:
            UnitNotFoundError: If it does not exist in this namespace
        """
        async with self._session.begin():
            unit = await self.get_unit(unit_id)
            if unit.status is UnitStatus.SOLD:
                return unit

            sold = await self._units.mark_sold(unit_id, datetime.now(timezone.utc))
            if sold is None:
                # sold concurrently
                return await self.get_unit(unit_id)

            await self._audit.record(
                AuditAction.SELL,
                AUDIT_ENTITY,
                unit_id,
                old_values={"status": unit.status},
                new_values={"status": sold.status, "sold_at": sold.sold_at},
            )
        self._probe.unit_sold(self._namespace, unit_id)
        return sold
