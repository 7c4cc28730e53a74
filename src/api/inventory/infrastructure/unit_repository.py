"""Namespace-scoped implementation of IUnitRepository.

Booking and selling are single conditional UPDATE statements, so two
concurrent bookings of one unit cannot both succeed.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import func, insert, select, update
from sqlalchemy.engine import RowMapping
from sqlalchemy.exc import IntegrityError

from infrastructure.database.scoping import ScopedSession
from inventory.domain.aggregates import Unit
from inventory.domain.exceptions import DuplicateUnitNumberError, UnitNotFoundError
from inventory.domain.value_objects import UnitFilter, UnitStatus
from inventory.infrastructure.models import units_table
from inventory.ports.repositories import IUnitRepository


class UnitRepository(IUnitRepository):
    """Units of the namespace bound to the given ScopedSession."""

    def __init__(self, session: ScopedSession) -> None:
        self._session = session

    async def add(self, unit: Unit) -> Unit:
        stmt = insert(units_table).values(**self._values(unit)).returning(units_table)
        result = await self._execute_unique(stmt, unit)
        return self._to_domain(result.mappings().one())

    async def update(self, unit: Unit) -> Unit:
        stmt = (
            update(units_table)
            .where(units_table.c.id == unit.id)
            .values(**self._values(unit))
            .returning(units_table)
        )
        result = await self._execute_unique(stmt, unit)
        row = result.mappings().one_or_none()
        if row is None:
            raise UnitNotFoundError(f"Unit {unit.id} not found")
        return self._to_domain(row)

    async def get_by_id(self, unit_id: int) -> Unit | None:
        stmt = select(units_table).where(units_table.c.id == unit_id)
        result = await self._session.execute(stmt)
        row = result.mappings().one_or_none()
        return self._to_domain(row) if row is not None else None

    async def list(
        self, criteria: UnitFilter, *, limit: int = 10, offset: int = 0
    ) -> list[Unit]:
        stmt = self._filtered(select(units_table), criteria)
        stmt = (
            stmt.order_by(units_table.c.project_id, units_table.c.unit_number)
            .limit(limit)
            .offset(offset)
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(row) for row in result.mappings().all()]

    async def count(self, criteria: UnitFilter) -> int:
        stmt = self._filtered(select(func.count()).select_from(units_table), criteria)
        return int(await self._session.scalar(stmt) or 0)

    async def book(
        self, unit_id: int, principal_id: int, booked_at: datetime
    ) -> Unit | None:
        stmt = (
            update(units_table)
            .where(
                units_table.c.id == unit_id,
                units_table.c.status == UnitStatus.AVAILABLE.value,
            )
            .values(
                status=UnitStatus.BOOKED.value,
                booked_by=principal_id,
                booked_at=booked_at,
            )
            .returning(units_table)
        )
        result = await self._session.execute(stmt)
        row = result.mappings().one_or_none()
        return self._to_domain(row) if row is not None else None

    async def mark_sold(self, unit_id: int, sold_at: datetime) -> Unit | None:
        stmt = (
            update(units_table)
            .where(
                units_table.c.id == unit_id,
                units_table.c.status != UnitStatus.SOLD.value,
            )
            .values(status=UnitStatus.SOLD.value, sold_at=sold_at)
            .returning(units_table)
        )
        result = await self._session.execute(stmt)
        row = result.mappings().one_or_none()
        return self._to_domain(row) if row is not None else None

    async def _execute_unique(self, stmt: Any, unit: Unit) -> Any:
        try:
            return await self._session.execute(stmt)
        except IntegrityError as e:
            if "uq_units_project_unit_number" in str(e):
                raise DuplicateUnitNumberError(
                    f"Unit number {unit.unit_number} already exists in this project"
                ) from e
            raise

    @staticmethod
    def _filtered(stmt: Any, criteria: UnitFilter) -> Any:
        columns = units_table.c
        if criteria.project_id is not None:
            stmt = stmt.where(columns.project_id == criteria.project_id)
        if criteria.status is not None:
            stmt = stmt.where(columns.status == criteria.status.value)
        if criteria.min_price is not None:
            stmt = stmt.where(columns.price >= criteria.min_price)
        if criteria.max_price is not None:
            stmt = stmt.where(columns.price <= criteria.max_price)
        if criteria.bedrooms is not None:
            stmt = stmt.where(columns.bedrooms == criteria.bedrooms)
        if criteria.active_only:
            stmt = stmt.where(columns.is_active.is_(True))
        return stmt

    @staticmethod
    def _values(unit: Unit) -> dict[str, Any]:
        return {
            "project_id": unit.project_id,
            "unit_number": unit.unit_number,
            "floor": unit.floor,
            "area": unit.area,
            "bedrooms": unit.bedrooms,
            "bathrooms": unit.bathrooms,
            "price": unit.price,
            "status": unit.status.value,
            "booked_by": unit.booked_by,
            "booked_at": unit.booked_at,
            "sold_at": unit.sold_at,
            "is_active": unit.is_active,
        }

    @staticmethod
    def _to_domain(row: RowMapping) -> Unit:
        return Unit(
            id=row["id"],
            project_id=row["project_id"],
            unit_number=row["unit_number"],
            floor=row["floor"],
            area=row["area"],
            bedrooms=row["bedrooms"],
            bathrooms=row["bathrooms"],
            price=row["price"],
            status=UnitStatus(row["status"]),
            booked_by=row["booked_by"],
            booked_at=row["booked_at"],
            sold_at=row["sold_at"],
            is_active=row["is_active"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
