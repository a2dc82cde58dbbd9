"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.

Dependencies: All config modules
System role: Central configuration aggregator
"""

from functools import lru_cache

from pydantic import Field

from recordaccess.configs.base import BaseSettings
from recordaccess.configs.webapi import WebApiSettings


class Settings(BaseSettings):
    """Unified settings aggregating all config modules."""

    webapi: WebApiSettings = Field(default_factory=WebApiSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get settings singleton.

    Environment variables are read once, on first call.

    Returns:
        Settings: Settings instance

    Usage:
        from recordaccess.configs import get_settings
        settings = get_settings()
    """
    return Settings()
