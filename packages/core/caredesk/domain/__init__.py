"""Domain layer: models, interfaces and transition components."""
