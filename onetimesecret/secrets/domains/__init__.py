"""Domain layer: API client, data model, options and configuration."""
