"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"

DEFAULT_VAPID_PUBLIC_KEY = (
    "BEl62iUYgUivxIkv69yViEuiBIa40HI0DLLjz7_QqM5UaKMxnhV9YLn8_v9Gk7nTdHOPP2Q2X2jj1jn4Mv7mXRo"
)


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./blogpush.db",
        description="SQLAlchemy URL of the local key/value storage",
        min_length=1,
    )
    api_base_url: str = Field(
        default="http://localhost:3000/api",
        description="Base URL of the blogging backend hosting the push registry",
        min_length=1,
    )
    registry_token: str | None = Field(
        default=None,
        description="Bearer token sent to the push registry and telemetry endpoints",
    )
    site_origin: str = Field(
        default="http://localhost:4200",
        description="Origin of the UI, used to build notification click targets",
        min_length=1,
    )
    vapid_public_key: str = Field(
        default=DEFAULT_VAPID_PUBLIC_KEY,
        description="Server identity key (base64url) used to request subscriptions",
        min_length=1,
    )
    notification_icon: str = Field(default="/assets/icons/icon-192x192.png")
    notification_badge: str = Field(default="/assets/icons/badge-72x72.png")
    worker_script_url: str = Field(default="/sw.js")
    worker_version: str = Field(default="1.0.0")
    background_sync_tag: str = Field(default="background-sync")
    http_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout applied to registry, telemetry and resync requests",
        gt=0,
    )
    platform_backend: str = Field(
        default="memory",
        description="Push platform adapter used by the service",
    )
    memory_platform_permission: str = Field(
        default="granted",
        description="Answer given by the in-memory platform to permission prompts",
    )
    log_level: str = Field(default="INFO")
    app_timezone: str = Field(default="UTC")

    @model_validator(mode="after")
    def _validate_origins(self) -> "Settings":
        for name in ("api_base_url", "site_origin"):
            value = getattr(self, name)
            if not value.startswith(("http://", "https://")):
                raise ValueError(f"{name.upper()} must be an absolute http(s) URL")
            setattr(self, name, value.rstrip("/"))
        if self.platform_backend not in {"memory"}:
            raise ValueError("PLATFORM_BACKEND must be one of: memory")
        if self.memory_platform_permission not in {"granted", "denied", "default"}:
            raise ValueError(
                "MEMORY_PLATFORM_PERMISSION must be one of: granted, denied, default"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["DEFAULT_VAPID_PUBLIC_KEY", "Settings", "get_settings", "reset_settings_cache"]
