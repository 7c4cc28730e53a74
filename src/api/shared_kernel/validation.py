"""Input rules shared by every bounded context.

Domain factories call these before any side effect; a violation raises
``ValidationError`` which the presentation layer maps to a 400 response.
"""

from __future__ import annotations

import re

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 255
PASSWORD_MIN_LENGTH = 8


class ValidationError(Exception):
    """Raised when input violates a domain rule.

    Raised before any side effect; callers surface it as a client error.
    """

    pass


def validate_display_name(value: str, field_name: str = "Name") -> str:
    """Trim and length-check a display name."""
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} is required")
    trimmed = value.strip()
    if len(trimmed) < NAME_MIN_LENGTH:
        raise ValidationError(
            f"{field_name} must be at least {NAME_MIN_LENGTH} characters"
        )
    if len(trimmed) > NAME_MAX_LENGTH:
        raise ValidationError(
            f"{field_name} cannot exceed {NAME_MAX_LENGTH} characters"
        )
    return trimmed


def validate_email(value: str, field_name: str = "Email") -> str:
    """Normalize (trim, lowercase) and check an email address."""
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} is required")
    normalized = value.strip().lower()
    if len(normalized) > NAME_MAX_LENGTH or not EMAIL_PATTERN.match(normalized):
        raise ValidationError(f"{field_name} must be a valid email")
    return normalized


def validate_password(value: str, field_name: str = "Password") -> str:
    """Check a plaintext credential's minimum length. Never logs the value."""
    if not isinstance(value, str) or len(value) < PASSWORD_MIN_LENGTH:
        raise ValidationError(
            f"{field_name} must be at least {PASSWORD_MIN_LENGTH} characters"
        )
    return value
