"""Core: configuration, composition root, and process lifespan."""
