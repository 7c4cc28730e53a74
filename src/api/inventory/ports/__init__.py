"""Ports (interfaces) for the inventory bounded context."""
