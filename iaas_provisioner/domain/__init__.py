"""Domain layer - machine model, exceptions and ports."""
