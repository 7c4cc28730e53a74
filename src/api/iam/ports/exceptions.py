"""Domain exceptions for IAM bounded context.

These exceptions represent domain-level errors that can occur during
repository and service operations. They should be caught and handled by
the presentation layer.
"""


class DuplicateEmailError(Exception):
    """Raised when an email is already used by another principal.

    Uniqueness is scoped to one namespace; the same email may exist in
    other tenant namespaces.
    """

    pass


class PrincipalNotFoundError(Exception):
    """Raised when a principal cannot be found in the active namespace."""

    pass


class InvalidCredentialsError(Exception):
    """Raised when a login cannot be authenticated.

    Unknown identifiers and wrong passwords raise this same error with the
    same message, so callers cannot tell which identifiers exist.
    """

    pass


class InactivePrincipalError(Exception):
    """Raised when a correctly authenticated principal is deactivated."""

    pass
