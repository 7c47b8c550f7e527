"""Configuration: user paths, settings file and logging."""
