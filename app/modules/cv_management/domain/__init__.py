"""Domain layer: constants, models, policy rules and services."""
