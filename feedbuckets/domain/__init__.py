"""Domain layer: bucket schemes, value objects and exceptions."""
