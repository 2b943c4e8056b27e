"""
Application settings using Pydantic.

Provides environment-based configuration loading with FABRICARCH_ prefix.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="FABRICARCH_",
    )

    # Environment
    environment: str = "development"

    # Debug
    debug: bool = False
    log_level: str = "INFO"

    # API
    api_prefix: str = "/api"
    cors_origins: list[str] = []

    # Network defaults applied by the loader, API and CLI
    default_network_name: str = "fabric-network"
    default_channel_name: str = "mychannel"
    default_consensus: str = "etcdraft"

    # Storage
    seed_sample_data: bool = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
