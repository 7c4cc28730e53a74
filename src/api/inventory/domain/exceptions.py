"""Domain exceptions for the inventory bounded context."""

from shared_kernel.validation import ValidationError

__all__ = [
    "DuplicateUnitNumberError",
    "ProjectNotFoundError",
    "UnitNotAvailableError",
    "UnitNotFoundError",
    "ValidationError",
]


class ProjectNotFoundError(Exception):
    """Raised when a project does not exist in the active namespace."""

    pass


class UnitNotFoundError(Exception):
    """Raised when a unit does not exist in the active namespace."""

    pass


class UnitNotAvailableError(Exception):
    """Raised when a unit cannot be booked or sold in its current state."""

    pass


class DuplicateUnitNumberError(Exception):
    """Raised when a unit number is reused within one project."""

    pass
