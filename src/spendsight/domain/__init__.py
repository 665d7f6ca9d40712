"""Domain layer: value objects, detection services and repository contracts."""
