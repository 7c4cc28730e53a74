"""Project application service.

Every instance works against one tenant namespace: its repository and
audit trail share the request's ScopedSession.
"""

from __future__ import annotations

from typing import Any

from audit.application.audit_trail import AuditTrail
from audit.domain.audit_entry import AuditAction
from infrastructure.database.scoping import ScopedSession
from inventory.application.observability import (
    DefaultInventoryServiceProbe,
    InventoryServiceProbe,
)
from inventory.domain.aggregates import Project
from inventory.domain.exceptions import ProjectNotFoundError
from inventory.domain.value_objects import ProjectStatus
from inventory.ports.repositories import IProjectRepository

AUDIT_ENTITY = "project"


class ProjectService:
    """Application service for projects."""

    def __init__(
        self,
        project_repository: IProjectRepository,
        audit_trail: AuditTrail,
        session: ScopedSession,
        probe: InventoryServiceProbe | None = None,
    ):
        self._projects = project_repository
        self._audit = audit_trail
        self._session = session
        self._probe = probe or DefaultInventoryServiceProbe()

    @property
    def _namespace(self) -> str:
        return self._session.namespace.value

    async def create_project(
        self,
        name: str,
        location: str,
        description: str | None = None,
        total_units: int = 0,
        status: str | ProjectStatus = ProjectStatus.PLANNING,
    ) -> Project:
        """Create a project.

        Raises:
            ValidationError: If any field is invalid
        """
        project = Project.create(
            name=name,
            location=location,
            description=description,
            total_units=total_units,
            status=status,
        )
        async with self._session.begin():
            project = await self._projects.add(project)
            await self._audit.record(
                AuditAction.CREATE,
                AUDIT_ENTITY,
                project.id,
                new_values=project.as_dict(),
            )
        self._probe.project_saved(self._namespace, project.id)
        return project

    async def list_projects(
        self,
        *,
        page: int = 1,
        limit: int = 10,
        status: ProjectStatus | None = None,
        active_only: bool = False,
    ) -> tuple[list[Project], int]:
        projects = await self._projects.list(
            status=status,
            active_only=active_only,
            limit=limit,
            offset=(page - 1) * limit,
        )
        total = await self._projects.count(status=status, active_only=active_only)
        return projects, total

    async def get_project(self, project_id: int) -> Project:
        """Retrieve a project.

        Raises:
            ProjectNotFoundError: If it does not exist in this namespace
        """
        project = await self._projects.get_by_id(project_id)
        if project is None:
            raise ProjectNotFoundError(f"Project {project_id} not found")
        return project

    async def update_project(self, project_id: int, **changes: Any) -> Project:
        """Update project fields.

        Raises:
            ProjectNotFoundError: If it does not exist in this namespace
            ValidationError: If a value is invalid
        """
        async with self._session.begin():
            project = await self.get_project(project_id)
            previous = project.update(**changes)
            if not previous:
                return project

            project = await self._projects.update(project)
            await self._audit.record(
                AuditAction.UPDATE,
                AUDIT_ENTITY,
                project.id,
                old_values=previous,
                new_values={key: getattr(project, key) for key in previous},
            )
        self._probe.project_saved(self._namespace, project.id)
        return project

    async def delete_project(self, project_id: int) -> None:
        """Soft delete a project.

        Raises:
            ProjectNotFoundError: If it does not exist in this namespace
        """
        async with self._session.begin():
            project = await self.get_project(project_id)
            old_values = project.as_dict()
            project.is_active = False
            await self._projects.update(project)
            await self._audit.record(
                AuditAction.DELETE, AUDIT_ENTITY, project.id, old_values=old_values
            )
        self._probe.project_deleted(self._namespace, project_id)
