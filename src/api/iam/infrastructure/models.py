"""Persistence structures for principals.

``PlatformUserModel`` is an ORM model in the root namespace.
``users_table`` is the Core table replicated into every tenant namespace;
it is only ever executed through a ``ScopedSession``.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Index,
    Integer,
    String,
    Table,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import (
    Base,
    TimestampMixin,
    namespace_metadata,
    timestamp_columns,
)


class PlatformUserModel(Base, TimestampMixin):
    """ORM model for platform administrators (root namespace)."""

    __tablename__ = "platform_users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default="Super Admin"
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<PlatformUserModel(id={self.id}, email={self.email})>"


users_table = Table(
    "users",
    namespace_metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("tenant_id", Integer, nullable=False),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False),
    Column("password_hash", String(255), nullable=False),
    Column("role", String(20), nullable=False),
    Column("is_active", Boolean, nullable=False, default=True),
    *timestamp_columns(),
    UniqueConstraint("email", name="uq_users_email"),
    Index("ix_users_role", "role"),
)
