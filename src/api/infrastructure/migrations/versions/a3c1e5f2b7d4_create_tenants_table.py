"""create tenants table

Revision ID: a3c1e5f2b7d4
Revises:
Create Date: 2026-10-12 10:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "a3c1e5f2b7d4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "tenants",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("contact", sa.String(length=255), nullable=False),
        sa.Column("subscription_type", sa.String(length=20), nullable=False),
        sa.Column("namespace_name", sa.String(length=63), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    # One namespace per tenant, and never shared
    op.create_index(
        "ix_tenants_namespace_name", "tenants", ["namespace_name"], unique=True
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_tenants_namespace_name", table_name="tenants")
    op.drop_table("tenants")
