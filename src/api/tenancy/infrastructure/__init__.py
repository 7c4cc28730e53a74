"""Tenancy infrastructure: tenant records, namespace registry and provisioning."""
