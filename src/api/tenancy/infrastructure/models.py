"""SQLAlchemy ORM model for the tenants table.

Stores tenant records in the root namespace. Each record points at the
namespace holding that tenant's data.
"""

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class TenantModel(Base, TimestampMixin):
    """ORM model for tenants table.

    Note: Display names are not unique. ``namespace_name`` is unique and
    holds a placeholder only while the onboarding transaction that created
    the row is still open.
    """

    __tablename__ = "tenants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact: Mapped[str] = mapped_column(String(255), nullable=False)
    subscription_type: Mapped[str] = mapped_column(String(20), nullable=False)
    namespace_name: Mapped[str] = mapped_column(
        String(63), nullable=False, unique=True, index=True
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<TenantModel(id={self.id}, name={self.name}, "
            f"namespace_name={self.namespace_name})>"
        )
