"""Application layer: services (use cases), interfaces (ports) and DTOs."""
