"""Infrastructure layer: persistence adapters for the application ports."""
