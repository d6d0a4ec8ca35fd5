"""Domain layer: entities and framework-free policies."""
