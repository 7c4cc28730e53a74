"""Namespace-scoped implementation of IProjectRepository."""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, insert, select, update
from sqlalchemy.engine import RowMapping

from infrastructure.database.scoping import ScopedSession
from inventory.domain.aggregates import Project
from inventory.domain.exceptions import ProjectNotFoundError
from inventory.domain.value_objects import ProjectStatus
from inventory.infrastructure.models import projects_table
from inventory.ports.repositories import IProjectRepository


class ProjectRepository(IProjectRepository):
    """Projects of the namespace bound to the given ScopedSession."""

    def __init__(self, session: ScopedSession) -> None:
        self._session = session

    async def add(self, project: Project) -> Project:
        stmt = (
            insert(projects_table)
            .values(**self._values(project))
            .returning(projects_table)
        )
        result = await self._session.execute(stmt)
        return self._to_domain(result.mappings().one())

    async def update(self, project: Project) -> Project:
        stmt = (
            update(projects_table)
            .where(projects_table.c.id == project.id)
            .values(**self._values(project))
            .returning(projects_table)
        )
        result = await self._session.execute(stmt)
        row = result.mappings().one_or_none()
        if row is None:
            raise ProjectNotFoundError(f"Project {project.id} not found")
        return self._to_domain(row)

    async def get_by_id(self, project_id: int) -> Project | None:
        stmt = select(projects_table).where(projects_table.c.id == project_id)
        result = await self._session.execute(stmt)
        row = result.mappings().one_or_none()
        return self._to_domain(row) if row is not None else None

    async def list(
        self,
        *,
        status: ProjectStatus | None = None,
        active_only: bool = False,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Project]:
        stmt = self._filtered(select(projects_table), status, active_only)
        stmt = (
            stmt.order_by(
                projects_table.c.created_at.desc(), projects_table.c.id.desc()
            )
            .limit(limit)
            .offset(offset)
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(row) for row in result.mappings().all()]

    async def count(
        self,
        *,
        status: ProjectStatus | None = None,
        active_only: bool = False,
    ) -> int:
        stmt = self._filtered(
            select(func.count()).select_from(projects_table), status, active_only
        )
        return int(await self._session.scalar(stmt) or 0)

    @staticmethod
    def _filtered(stmt: Any, status: ProjectStatus | None, active_only: bool) -> Any:
        if status is not None:
            stmt = stmt.where(projects_table.c.status == status.value)
        if active_only:
            stmt = stmt.where(projects_table.c.is_active.is_(True))
        return stmt

    @staticmethod
    def _values(project: Project) -> dict[str, Any]:
        return {
            "name": project.name,
            "location": project.location,
            "description": project.description,
            "total_units": project.total_units,
            "status": project.status.value,
            "is_active": project.is_active,
        }

    @staticmethod
    def _to_domain(row: RowMapping) -> Project:
        return Project(
            id=row["id"],
            name=row["name"],
            location=row["location"],
            description=row["description"],
            total_units=row["total_units"],
            status=ProjectStatus(row["status"]),
            is_active=row["is_active"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
