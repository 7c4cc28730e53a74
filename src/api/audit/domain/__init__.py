"""Audit domain: the per-namespace trail of tenant mutations."""
