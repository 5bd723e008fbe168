"""Configuration models: environment variables and lookup settings."""
