"""
fabricarch configuration.

Pydantic-based settings read from environment variables and .env files.
"""

from fabricarch.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
