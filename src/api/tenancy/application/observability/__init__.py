"""Domain-Oriented Observability for the tenancy application layer."""

from tenancy.application.observability.lookup_probe import (
    CrossNamespaceLookupProbe,
    DefaultCrossNamespaceLookupProbe,
)
from tenancy.application.observability.onboarding_probe import (
    DefaultOnboardingProbe,
    OnboardingProbe,
)
from tenancy.application.observability.tenant_service_probe import (
    DefaultTenantServiceProbe,
    TenantServiceProbe,
)

__all__ = [
    "CrossNamespaceLookupProbe",
    "DefaultCrossNamespaceLookupProbe",
    "DefaultOnboardingProbe",
    "DefaultTenantServiceProbe",
    "OnboardingProbe",
    "TenantServiceProbe",
]
