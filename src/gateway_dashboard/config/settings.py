"""
Module: settings.py
Description: Application configuration using pydantic-settings.

Configures all dashboard settings from environment variables with
validation and defaults. Supports .env files for local development.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application settings
    app_name: str = Field(default="Gateway Dashboard", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    log_level: str = Field(default="INFO", description="Logging level")

    # Gateway connection settings
    gateway_url: str = Field(
        default="http://localhost:3000",
        description="Base URL of the messaging gateway (Socket.IO and REST)"
    )
    socketio_path: str = Field(default="socket.io", description="Socket.IO endpoint path")
    sessions_path: str = Field(default="/api/sessions", description="Session list endpoint path")
    http_timeout: float = Field(
        default=10.0,
        gt=0,
        le=60,
        description="HTTP timeout in seconds for session directory requests"
    )
    reconnection_attempts: int = Field(
        default=0,
        ge=0,
        description="Socket.IO reconnection attempts after a drop (0 means unlimited)"
    )
    reconnection_delay: float = Field(default=1.0, gt=0, description="Initial reconnection delay")
    reconnection_delay_max: float = Field(default=5.0, gt=0, description="Maximum reconnection delay")
    connect_retry_attempts: int = Field(
        default=5,
        ge=1,
        le=20,
        description="Attempts for the initial gateway connection"
    )
    connect_retry_pause: float = Field(
        default=30.0,
        gt=0,
        description="Pause in seconds between rounds of initial connection attempts"
    )

    # Local persistence settings
    storage_path: str = Field(
        default=".dashboard/storage.json",
        description="Path of the client-local key/value store file"
    )
    storage_quota_bytes: int = Field(
        default=5 * 1024 * 1024,
        ge=1024,
        description="Maximum serialized size of the local store"
    )
    history_key: str = Field(default="webhook_history", description="Storage key for webhook history")
    page_size_key: str = Field(default="webhook_page_size", description="Storage key for page size preference")

    # Webhook history settings
    default_page_size: str = Field(default="50", description="Page size used when none is persisted")
    page_size_options: List[int] = Field(
        default=[10, 25, 50, 100],
        description="Selectable fixed page sizes"
    )
    capacity_multiplier: int = Field(
        default=10,
        ge=1,
        description="Pages of scrollback retained for a fixed page size"
    )
    all_capacity: int = Field(
        default=10000,
        ge=1,
        description="Retention ceiling when every record is shown on one page"
    )
    display_timezone: str = Field(default="UTC", description="Timezone used to render timestamps")
    activity_log_limit: int = Field(default=200, ge=1, description="Activity feed entries retained")

    @field_validator('gateway_url')
    @classmethod
    def validate_gateway_url(cls, v: str) -> str:
        """Validate gateway URL is an HTTP(S) URL."""
        if not v or not v.startswith(('http://', 'https://')):
            raise ValueError("gateway_url must be a valid HTTP/HTTPS URL")
        return v.rstrip('/')

    @field_validator('page_size_options')
    @classmethod
    def validate_page_size_options(cls, v: List[int]) -> List[int]:
        """Validate page size options are distinct positive integers."""
        if not v:
            raise ValueError("page_size_options cannot be empty")
        if any(size <= 0 for size in v):
            raise ValueError("page_size_options must be positive integers")
        return sorted(set(v))

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid logging level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")
        return v.upper()


# Global settings instance
settings = Settings()
