"""Environment-based configuration using pydantic-settings.

Provides type-safe, validated configuration from environment variables.
The backend URL and API key are required: a process started without them
fails at settings load instead of issuing malformed requests.

Example:
    >>> from mecha_mcp.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.timeout_ms
    10000

    # Environment variables:
    # MECHA_AGENT_SERVER_URL=https://mecha-agent.example.com
    # MECHA_AGENT_API_KEY=mak_...
    # MECHA_AGENT_TIMEOUT_MS=20000
    # MECHA_AGENT_LOG_LEVEL=DEBUG
    # MECHA_AGENT_MCP_TRANSPORT=streamable-http
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MECHA_AGENT_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class ServerSettings(BaseSettings):
    """MCP server identity and transport."""

    model_config = SettingsConfigDict(
        env_prefix="MECHA_AGENT_MCP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    name: str = "mecha_agent_mcp_server"
    transport: Literal["stdio", "sse", "streamable-http"] = "stdio"
    host: str = "127.0.0.1"
    port: Annotated[int, Field(ge=1, le=65535)] = 8080


class MechaSettings(BaseSettings):
    """Root settings, loaded once at startup.

    Example environment variables:
        MECHA_AGENT_SERVER_URL=https://mecha-agent.example.com
        MECHA_AGENT_API_KEY=mak_live_...
        MECHA_AGENT_TIMEOUT_MS=10000
    """

    model_config = SettingsConfigDict(
        env_prefix="MECHA_AGENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_default=True,
        frozen=True,
    )

    server_url: str = Field(..., description="Backend base URL; requests go to {server_url}/api/{path}")
    api_key: SecretStr = Field(..., description="Static bearer token sent on every request")
    timeout_ms: Annotated[int, Field(ge=1, le=300_000)] = 10_000

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    @field_validator("server_url", mode="before")
    @classmethod
    def _normalize_url(cls, v: str) -> str:
        if not isinstance(v, str):
            return v
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError("server_url must start with http:// or https://")
        return v

    @field_validator("api_key")
    @classmethod
    def _require_key(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value().strip():
            raise ValueError("api_key must not be empty")
        return v


@lru_cache(maxsize=1)
def get_settings() -> MechaSettings:
    """Get the global settings instance (cached).

    Raises:
        pydantic.ValidationError: when required variables are missing or invalid.
    """
    return MechaSettings()  # type: ignore[call-arg]


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
