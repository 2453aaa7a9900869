"""Common package: shared exceptions and configuration."""
