"""Namespace-scoped implementation of IInventorySummaryReader."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import case, func, select

from infrastructure.database.scoping import ScopedSession
from inventory.domain.value_objects import InventorySummary, UnitStatus
from inventory.infrastructure.models import projects_table, units_table
from inventory.ports.repositories import IInventorySummaryReader


def _status_count(status: UnitStatus):
    return func.coalesce(
        func.sum(case((units_table.c.status == status.value, 1), else_=0)), 0
    )


class InventorySummaryReader(IInventorySummaryReader):
    """Two aggregate queries over one namespace's active inventory."""

    def __init__(self, session: ScopedSession) -> None:
        self._session = session

    async def summarize(self) -> InventorySummary:
        active_projects = await self._session.scalar(
            select(func.count())
            .select_from(projects_table)
            .where(projects_table.c.is_active.is_(True))
        )

        units_stmt = select(
            func.count().label("total"),
            _status_count(UnitStatus.AVAILABLE).label("available"),
            _status_count(UnitStatus.BOOKED).label("booked"),
            _status_count(UnitStatus.SOLD).label("sold"),
            func.coalesce(
                func.sum(
                    case(
                        (units_table.c.status == UnitStatus.SOLD.value, units_table.c.price),
                        else_=0,
                    )
                ),
                0,
            ).label("revenue"),
        ).where(units_table.c.is_active.is_(True))
        row = (await self._session.execute(units_stmt)).mappings().one()

        return InventorySummary(
            active_projects=int(active_projects or 0),
            total_units=int(row["total"]),
            available_units=int(row["available"]),
            booked_units=int(row["booked"]),
            sold_units=int(row["sold"]),
            revenue=Decimal(str(row["revenue"])),
        )
