"""Aggregates for the inventory domain."""

from inventory.domain.aggregates.project import Project
from inventory.domain.aggregates.unit import Unit

__all__ = ["Project", "Unit"]
