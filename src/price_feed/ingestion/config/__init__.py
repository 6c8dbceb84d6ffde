"""Per-component configuration value objects."""
