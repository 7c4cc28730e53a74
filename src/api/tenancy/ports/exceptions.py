"""Infrastructure-facing exceptions for the tenancy bounded context.

Raised by namespace registry and provisioner implementations; the
onboarding service treats both as fatal to the attempt.
"""

from __future__ import annotations


class ProvisioningError(Exception):
    """Raised when a namespace cannot be created or structured.

    Attributes:
        namespace: The namespace being provisioned
        step: The structural step that failed, if any
    """

    def __init__(self, message: str, namespace: str, step: str | None = None):
        super().__init__(message)
        self.namespace = namespace
        self.step = step


class NamespaceCollisionError(Exception):
    """Raised when a freshly derived namespace name is already registered.

    Names derive from store-assigned identities, so this signals a logic
    error or manual tampering. It is never retried automatically.
    """

    def __init__(self, namespace: str):
        super().__init__(f"Namespace '{namespace}' is already registered")
        self.namespace = namespace
