"""Shared middleware for cross-cutting concerns.

This module contains values and probes that are shared across bounded
contexts. The request context is the primary component: every
authenticated request carries one after namespace resolution.
"""

from shared_kernel.middleware.request_context import RequestContext

__all__ = ["RequestContext"]
