"""Application layer for the audit bounded context."""
