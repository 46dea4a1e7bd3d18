"""Infrastructure layer - logging, error aggregation and registries."""
