"""Repository and service interfaces (ports)."""
