"""Config-related errors."""

from __future__ import annotations


class ConfigError(ValueError):
    """Raised when gateway configuration is invalid or unreadable."""
