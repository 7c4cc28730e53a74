"""Shared Kernel module.

This module contains foundational components that are explicitly shared across
multiple bounded contexts. Changes to this module affect multiple contexts and
should be carefully coordinated.

Namespace naming, the resolved request context and authentication
primitives live here because every tenant-scoped context depends on them.
"""
