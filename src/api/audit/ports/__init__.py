"""Ports (interfaces) for the audit bounded context."""
