"""Shared infrastructure for docsrails (logging)."""
