"""Application layer: ports, DTOs, authorization services, and use cases."""
