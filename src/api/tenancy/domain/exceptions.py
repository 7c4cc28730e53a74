"""Domain exceptions for the tenancy bounded context."""

from shared_kernel.validation import ValidationError

__all__ = [
    "MalformedContextError",
    "TenantNotFoundError",
    "TenantResolutionError",
    "TenantSuspendedError",
    "ValidationError",
]


class TenantResolutionError(Exception):
    """Base class for failures to resolve a request's namespace.

    All subclasses are surfaced as authorization failures that do not
    reveal which check failed.
    """

    pass


class TenantNotFoundError(TenantResolutionError):
    """Raised when the tenant named by a claim does not exist."""

    pass


class TenantSuspendedError(TenantResolutionError):
    """Raised when the tenant named by a claim is deactivated."""

    pass


class MalformedContextError(TenantResolutionError):
    """Raised when a claim cannot be mapped to exactly one namespace.

    Covers a tenant id without a namespace (or the reverse), a namespace
    that does not belong to the claimed tenant, and unknown roles.
    """

    pass
