"""Value objects for the tenancy domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


@dataclass(frozen=True)
class TenantId:
    """Identifier for a Tenant aggregate.

    Assigned by the store when the tenant record is inserted and never
    changed afterwards.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"Invalid TenantId: {self.value!r}")
        if self.value < 1:
            raise ValueError(f"TenantId must be positive, got {self.value}")

    def __str__(self) -> str:
        """Return string representation."""
        return str(self.value)

    @classmethod
    def from_string(cls, value: str) -> TenantId:
        """Create TenantId from a path or claim value.

        Raises:
            ValueError: If value is not a positive integer
        """
        if not value.isdigit():
            raise ValueError(f"Invalid TenantId: {value}")
        return cls(value=int(value))


class SubscriptionTier(StrEnum):
    """Subscription plans a tenant can be on."""

    BASIC = "Basic"
    PREMIUM = "Premium"
