"""Infrastructure layer for the audit bounded context."""
