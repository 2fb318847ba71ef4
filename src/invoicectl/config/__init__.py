"""Configuration: JSON config discovery, settings, and logging setup."""
