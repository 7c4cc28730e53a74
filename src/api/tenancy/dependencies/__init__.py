"""FastAPI dependencies for the tenancy bounded context."""
