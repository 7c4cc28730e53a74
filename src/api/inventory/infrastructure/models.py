"""Namespace tables for projects and units.

Both tables are replicated into every tenant namespace. ``units`` refers
to ``projects`` inside the same namespace.
"""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Table,
    Text,
    UniqueConstraint,
)

from infrastructure.database.models import namespace_metadata, timestamp_columns

projects_table = Table(
    "projects",
    namespace_metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("location", String(255), nullable=False),
    Column("description", Text, nullable=True),
    Column("total_units", Integer, nullable=False, default=0),
    Column("status", String(30), nullable=False, default="Planning"),
    Column("is_active", Boolean, nullable=False, default=True),
    *timestamp_columns(),
    Index("ix_projects_status", "status"),
)

units_table = Table(
    "units",
    namespace_metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "project_id",
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("unit_number", String(50), nullable=False),
    Column("floor", Integer, nullable=True),
    Column("area", Numeric(10, 2), nullable=True),
    Column("bedrooms", Integer, nullable=True),
    Column("bathrooms", Integer, nullable=True),
    Column("price", Numeric(15, 2), nullable=False),
    Column("status", String(20), nullable=False, default="Available"),
    Column("booked_by", Integer, nullable=True),
    Column("booked_at", DateTime(timezone=True), nullable=True),
    Column("sold_at", DateTime(timezone=True), nullable=True),
    Column("is_active", Boolean, nullable=False, default=True),
    *timestamp_columns(),
    UniqueConstraint("project_id", "unit_number", name="uq_units_project_unit_number"),
    Index("ix_units_project_id", "project_id"),
    Index("ix_units_status", "status"),
)
