"""Domain layer: models and view objects."""
