"""Domain-Oriented Observability for the inventory application layer."""

from inventory.application.observability.inventory_probe import (
    DefaultInventoryServiceProbe,
    InventoryServiceProbe,
)

__all__ = ["DefaultInventoryServiceProbe", "InventoryServiceProbe"]
