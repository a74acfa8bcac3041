"""Settings, constants and logging setup."""
