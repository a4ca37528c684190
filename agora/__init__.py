"""Agora: community platform core (subscriptions, posts, and the authorization engines)."""

__version__ = "1.0.0"
