"""Aggregates for the IAM domain."""

from iam.domain.aggregates.principal import Principal

__all__ = ["Principal"]
