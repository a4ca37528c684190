"""Persistence: SQLAlchemy (postgres) and in-memory repositories."""
