"""Ports (interfaces) for the IAM bounded context."""
