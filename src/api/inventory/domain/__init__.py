"""Inventory domain: projects and the units they contain."""
