"""
Are.na MCP Server - Configuration

Pydantic Settings for all configuration via environment variables.
"""

import math
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import Literal


ARENA_WEB_URL = "https://www.are.na"
ARENA_WEB_HOSTS = ("are.na", "www.are.na")

DEFAULT_PER_PAGE = 50


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def clamp_per_page(per) -> int:
    """Clamp a page size into the 1-100 range the API accepts."""
    if per is None or (isinstance(per, float) and math.isnan(per)):
        return DEFAULT_PER_PAGE
    return _clamp(int(math.floor(per)), 1, 100)


class ArenaSettings(BaseSettings):
    """Are.na API configuration."""
    access_token: str = Field(..., alias="ARENA_ACCESS_TOKEN")
    api_base_url: str = Field("https://api.are.na", alias="ARENA_API_BASE_URL")
    api_timeout_ms: int = Field(15_000, alias="ARENA_API_TIMEOUT_MS")
    max_retries: int = Field(5, alias="ARENA_MAX_RETRIES")
    backoff_base_ms: int = Field(500, alias="ARENA_BACKOFF_BASE_MS")
    max_concurrent_requests: int = Field(4, alias="ARENA_MAX_CONCURRENT_REQUESTS")
    default_per_page: int = Field(DEFAULT_PER_PAGE, alias="ARENA_DEFAULT_PER_PAGE")
    enable_v2_search_fallback: bool = Field(
        True, alias="ARENA_ENABLE_V2_SEARCH_FALLBACK"
    )

    model_config = {"env_prefix": "", "extra": "ignore"}

    @field_validator("access_token")
    @classmethod
    def _require_token(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("ARENA_ACCESS_TOKEN must not be blank")
        return value

    @field_validator("api_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("api_timeout_ms")
    @classmethod
    def _clamp_timeout(cls, value: int) -> int:
        return _clamp(value, 1_000, 120_000)

    @field_validator("max_retries")
    @classmethod
    def _clamp_retries(cls, value: int) -> int:
        return _clamp(value, 0, 10)

    @field_validator("backoff_base_ms")
    @classmethod
    def _clamp_backoff(cls, value: int) -> int:
        return _clamp(value, 50, 30_000)

    @field_validator("max_concurrent_requests")
    @classmethod
    def _clamp_concurrency(cls, value: int) -> int:
        return _clamp(value, 1, 64)

    @field_validator("default_per_page")
    @classmethod
    def _clamp_default_per_page(cls, value: int) -> int:
        return clamp_per_page(value)


class MCPSettings(BaseSettings):
    """MCP server configuration."""
    transport: Literal["stdio", "sse", "http"] = Field(
        "stdio", alias="MCP_TRANSPORT"
    )
    port: int = Field(8787, alias="MCP_PORT")
    host: str = Field("0.0.0.0", alias="MCP_HOST")

    model_config = {"env_prefix": "", "extra": "ignore"}


class LogSettings(BaseSettings):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO", alias="LOG_LEVEL"
    )

    model_config = {"env_prefix": "", "extra": "ignore"}


class Settings(BaseSettings):
    """Main settings aggregating all configuration."""
    arena: ArenaSettings = Field(default_factory=ArenaSettings)
    mcp: MCPSettings = Field(default_factory=MCPSettings)
    log: LogSettings = Field(default_factory=LogSettings)

    model_config = {"env_prefix": "", "extra": "ignore"}


def get_settings() -> Settings:
    """Load settings from environment variables."""
    from dotenv import load_dotenv
    load_dotenv()
    return Settings()
