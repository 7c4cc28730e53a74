"""Request and response models for projects."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from inventory.domain.aggregates import Project


class CreateProjectRequest(BaseModel):
    name: str = Field(..., description="Project name")
    location: str = Field(..., description="Where the project is built")
    description: str | None = None
    total_units: int = Field(default=0, description="Planned number of units")
    status: str = Field(
        default="Planning",
        description="Planning, Under Construction, Completed or On Hold",
    )


class UpdateProjectRequest(BaseModel):
    name: str | None = None
    location: str | None = None
    description: str | None = None
    total_units: int | None = None
    status: str | None = None
    is_active: bool | None = None


class ProjectResponse(BaseModel):
    id: int
    name: str
    location: str
    description: str | None
    total_units: int
    status: str
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, project: Project) -> ProjectResponse:
        return cls(
            id=project.id,
            name=project.name,
            location=project.location,
            description=project.description,
            total_units=project.total_units,
            status=project.status.value,
            is_active=project.is_active,
            created_at=project.created_at,
            updated_at=project.updated_at,
        )


class ProjectListResponse(BaseModel):
    projects: list[ProjectResponse]
    total: int
    page: int
    limit: int
