"""IAM domain layer: principals, roles and permissions."""
