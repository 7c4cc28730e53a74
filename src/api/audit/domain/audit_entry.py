"""Audit entry value object and helpers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum, StrEnum
from typing import Any


class AuditAction(StrEnum):
    """Mutations recorded in a tenant's audit trail."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    BOOK = "BOOK"
    SELL = "SELL"
    ACTIVATE = "ACTIVATE"
    DEACTIVATE = "DEACTIVATE"


@dataclass(frozen=True)
class AuditActor:
    """Who performed a mutation, as seen by the HTTP layer."""

    user_id: int
    user_name: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True)
class AuditEntry:
    """One immutable line of a tenant's audit trail."""

    action: AuditAction
    entity: str
    entity_id: int | None
    user_id: int | None = None
    user_name: str | None = None
    old_values: dict[str, Any] | None = None
    new_values: dict[str, Any] | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    id: int | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class AuditFilter:
    """Criteria for listing audit entries."""

    user_id: int | None = None
    action: AuditAction | None = None
    entity: str | None = None
    entity_id: int | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None


def snapshot(values: dict[str, Any] | None) -> dict[str, Any] | None:
    """Convert a field mapping into JSON-compatible values."""
    if values is None:
        return None
    return {key: _jsonable(value) for key, value in values.items()}


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value
