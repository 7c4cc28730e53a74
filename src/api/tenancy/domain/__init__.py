"""Tenancy domain layer: tenant records and their lifecycle rules."""
