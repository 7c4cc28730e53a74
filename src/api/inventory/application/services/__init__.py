"""Application services for the inventory bounded context."""

from inventory.application.services.project_service import ProjectService
from inventory.application.services.unit_service import UnitService

__all__ = ["ProjectService", "UnitService"]
