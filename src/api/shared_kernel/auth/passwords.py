"""Credential hashing.

Plaintext credentials only pass through ``hash`` and ``verify``; they are
never stored or logged, and callers never inspect the hash format.
"""

from __future__ import annotations

from typing import Protocol

import bcrypt


class PasswordHasher(Protocol):
    """Hashes and verifies principal credentials."""

    def hash(self, plaintext: str) -> str:
        """Return an opaque hash for the plaintext credential."""
        ...

    def verify(self, plaintext: str, hashed: str) -> bool:
        """Check a plaintext credential against a stored hash."""
        ...


class BcryptPasswordHasher:
    """PasswordHasher backed by bcrypt."""

    def __init__(self, rounds: int = 12):
        self._rounds = rounds

    def hash(self, plaintext: str) -> str:
        """Hash a credential using bcrypt.

        Uses bcrypt with automatic salt generation for secure password hashing.

        Args:
            plaintext: The credential to hash

        Returns:
            The bcrypt hash as a string
        """
        return bcrypt.hashpw(
            plaintext.encode(), bcrypt.gensalt(rounds=self._rounds)
        ).decode()

    def verify(self, plaintext: str, hashed: str) -> bool:
        """Verify a credential against its hash using constant-time comparison.

        Args:
            plaintext: The credential to verify
            hashed: The bcrypt hash to verify against

        Returns:
            True if the credential matches the hash, False otherwise
        """
        try:
            return bcrypt.checkpw(plaintext.encode(), hashed.encode())
        except ValueError:
            # Malformed or foreign hash format
            return False
