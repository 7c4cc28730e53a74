"""Application layer for the inventory bounded context."""
