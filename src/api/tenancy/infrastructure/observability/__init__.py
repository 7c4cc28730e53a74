"""Domain-Oriented Observability for tenancy infrastructure.

Probes for tenant record persistence and namespace management.
"""

from tenancy.infrastructure.observability.namespace_probe import (
    DefaultNamespaceProbe,
    NamespaceProbe,
)
from tenancy.infrastructure.observability.repository_probe import (
    DefaultTenantRepositoryProbe,
    TenantRepositoryProbe,
)

__all__ = [
    "DefaultNamespaceProbe",
    "DefaultTenantRepositoryProbe",
    "NamespaceProbe",
    "TenantRepositoryProbe",
]
