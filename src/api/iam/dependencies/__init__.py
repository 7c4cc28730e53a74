"""FastAPI dependencies for the IAM bounded context."""
