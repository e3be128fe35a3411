"""Domain layer - record layouts and store value objects."""
