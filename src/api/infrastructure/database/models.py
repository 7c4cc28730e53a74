"""SQLAlchemy declarative base and shared model utilities.

Two metadata collections exist side by side:

- ``Base.metadata`` holds the ORM models of the root namespace (tenant
  records, platform administrators). Alembic migrates it.
- ``namespace_metadata`` holds the Core tables replicated into every
  tenant namespace. Those tables carry no schema; they are only ever
  executed through a ``ScopedSession`` which supplies the namespace, and
  they are materialized by the namespace provisioner rather than Alembic.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Column, DateTime, MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utc_now() -> datetime:
    """Generate UTC timestamp for database defaults.

    Uses a named function instead of lambda for SQLAlchemy 2.0 compatibility.
    Ensures proper INSERT-time evaluation.
    """
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for the root namespace ORM models.

    It provides the declarative base functionality and type hints for SQLAlchemy 2.0.
    """

    # Type annotation for SQLAlchemy
    type_annotation_map: dict[type, Any] = {}


class TimestampMixin:
    """Mixin providing created_at and updated_at timestamp columns.

    Automatically sets created_at on insert and updates updated_at on modification.
    Uses timezone-aware UTC timestamps with Python-side default generation.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=_utc_now,  # Evaluated at INSERT time
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=_utc_now,  # Evaluated at INSERT time
        onupdate=_utc_now,  # Evaluated at UPDATE time
        nullable=False,
    )


namespace_metadata = MetaData()


def timestamp_columns(include_updated: bool = True) -> list[Column[datetime]]:
    """Build created_at/updated_at columns for a namespace table.

    Core counterpart of ``TimestampMixin``; fresh columns are needed per table.
    Append-only tables pass ``include_updated=False``.
    """
    columns: list[Column[datetime]] = [
        Column(
            "created_at",
            DateTime(timezone=True),
            default=_utc_now,
            nullable=False,
        ),
    ]
    if include_updated:
        columns.append(
            Column(
                "updated_at",
                DateTime(timezone=True),
                default=_utc_now,
                onupdate=_utc_now,
                nullable=False,
            )
        )
    return columns
