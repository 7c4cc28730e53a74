"""Namespace table for the audit trail."""

from sqlalchemy import Column, Index, Integer, String, Table, Text
from sqlalchemy.dialects.postgresql import JSONB

from infrastructure.database.models import namespace_metadata, timestamp_columns

audit_logs_table = Table(
    "audit_logs",
    namespace_metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, nullable=False),
    Column("user_name", String(255), nullable=True),
    Column("action", String(20), nullable=False),
    Column("entity", String(50), nullable=False),
    Column("entity_id", Integer, nullable=True),
    Column("old_values", JSONB, nullable=True),
    Column("new_values", JSONB, nullable=True),
    Column("ip_address", String(45), nullable=True),
    Column("user_agent", Text, nullable=True),
    *timestamp_columns(include_updated=False),
    Index("ix_audit_logs_entity", "entity", "entity_id"),
    Index("ix_audit_logs_user_id", "user_id"),
    Index("ix_audit_logs_created_at", "created_at"),
)
