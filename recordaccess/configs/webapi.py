"""
Entity Web API configuration settings.

Manages connection details for the remote entity-record store and the
behaviour of the development-mode mock backend.

Dependencies: pydantic, pydantic_settings
System role: Record access configuration
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BACKEND_MODES = ("auto", "live", "mock")


class WebApiSettings(BaseSettings):
    """Remote record store configuration (live Web API or local mock)."""

    model_config = SettingsConfigDict(
        env_prefix="WEBAPI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    backend: str = Field(
        default="auto",
        description="Backend selection: 'live', 'mock', or 'auto' (live when a base URL is set)",
    )
    base_url: str | None = Field(
        default=None,
        description="Organization URL, e.g. https://contoso.crm.dynamics.com",
    )
    api_version: str = Field(default="v9.2", description="Web API version path segment")
    access_token: str | None = Field(default=None, description="Bearer token for the Web API")
    timeout_seconds: float = Field(default=30.0, description="HTTP timeout per request")

    bind_suffix: str = Field(
        default="@bind",
        description="Suffix appended to a reference field name to form its bind key",
    )
    metadata_cache: bool = Field(
        default=True,
        description="Cache collection name -> entity set name lookups for the process lifetime",
    )
    mock_delay_seconds: float = Field(
        default=0.3,
        ge=0.0,
        description="Artificial latency applied to every mock backend operation",
    )

    @field_validator("backend")
    @classmethod
    def _check_backend(cls, value: str) -> str:
        value = value.lower()
        if value not in BACKEND_MODES:
            raise ValueError(f"backend must be one of {', '.join(BACKEND_MODES)}")
        return value

    @property
    def service_root(self) -> str | None:
        """Web API service root URL, or None when no base URL is configured."""
        if not self.base_url:
            return None
        return f"{self.base_url.rstrip('/')}/api/data/{self.api_version}/"
