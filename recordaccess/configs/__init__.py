"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from recordaccess.configs.settings import Settings, get_settings
from recordaccess.configs.webapi import WebApiSettings

__all__ = ["Settings", "WebApiSettings", "get_settings"]
