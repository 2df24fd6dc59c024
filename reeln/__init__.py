"""Configuration models, paths, loading, environment overrides and validation for replay video workflows."""

__version__ = "0.2.3"

__all__ = ["errors", "model", "loader", "paths"]