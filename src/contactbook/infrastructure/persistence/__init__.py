"""Database-backed ContactStore adapters."""
