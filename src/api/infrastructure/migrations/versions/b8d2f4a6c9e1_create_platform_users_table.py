"""create platform users table

Revision ID: b8d2f4a6c9e1
Revises: a3c1e5f2b7d4
Create Date: 2026-10-12 10:05:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "b8d2f4a6c9e1"
down_revision: Union[str, Sequence[str], None] = "a3c1e5f2b7d4"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "platform_users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_platform_users_email", "platform_users", ["email"], unique=True
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_platform_users_email", table_name="platform_users")
    op.drop_table("platform_users")
