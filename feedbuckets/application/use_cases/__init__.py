"""Use cases orchestrating domain logic over the ports."""
