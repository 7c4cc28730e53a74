"""Domain-Oriented Observability for IAM infrastructure."""

from iam.infrastructure.observability.repository_probe import (
    DefaultPrincipalRepositoryProbe,
    PrincipalRepositoryProbe,
)

__all__ = [
    "DefaultPrincipalRepositoryProbe",
    "PrincipalRepositoryProbe",
]
