"""Application-layer value objects for IAM bounded context."""

from __future__ import annotations

from dataclasses import dataclass

from iam.domain.aggregates import Principal
from shared_kernel.auth import IssuedToken
from shared_kernel.namespaces import NamespaceName


@dataclass(frozen=True)
class AuthenticatedSession:
    """A successful login or refresh: the token and who it was issued to."""

    token: IssuedToken
    principal: Principal
    namespace: NamespaceName
