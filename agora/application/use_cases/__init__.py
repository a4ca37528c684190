"""Application use cases, grouped per module."""
