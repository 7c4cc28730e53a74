"""Infrastructure layer for the inventory bounded context."""
