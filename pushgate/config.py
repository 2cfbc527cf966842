"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"

DEFAULT_FCM_BASE_URL = "https://fcm.googleapis.com"
DEFAULT_FCM_LEGACY_URL = "https://fcm.googleapis.com/fcm/send"
DEFAULT_OAUTH_TOKEN_URL = "https://oauth2.googleapis.com/token"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./pushgate.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    app_timezone: str | None = Field(
        default="UTC",
        description="Timezone used when stamping dispatch timestamps",
    )
    cors_allowed_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the API from a browser",
    )

    firebase_project_id: str | None = Field(
        default=None,
        description="Project that owns the structured (HTTP v1) messaging API",
    )
    firebase_service_account: str | None = Field(
        default=None,
        description="Service account JSON document used to mint HTTP v1 access tokens",
    )
    fcm_server_key: str | None = Field(
        default=None,
        description="Server key for the deprecated legacy messaging API",
    )
    fcm_base_url: str = Field(default=DEFAULT_FCM_BASE_URL, min_length=1)
    fcm_legacy_url: str = Field(default=DEFAULT_FCM_LEGACY_URL, min_length=1)
    oauth_token_url: str = Field(
        default=DEFAULT_OAUTH_TOKEN_URL,
        description="OAuth2 token endpoint; override only for testing",
        min_length=1,
    )

    push_click_action: str = Field(default="FLUTTER_NOTIFICATION_CLICK", min_length=1)
    push_android_channel_id: str = Field(default="high_importance_channel", min_length=1)
    push_request_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout applied to every provider HTTP request",
        gt=0,
    )
    push_dispatch_max_workers: int = Field(
        default=8,
        description="Number of concurrent device sends per dispatch; 1 sends sequentially",
        ge=1,
    )
    push_credential_cache_enabled: bool = Field(
        default=True,
        description="Reuse minted access tokens across dispatches until near expiry",
    )
    credential_refresh_margin_seconds: int = Field(
        default=60,
        description="Cached access tokens closer than this to expiry are re-minted",
        ge=0,
    )

    @model_validator(mode="after")
    def _strip_blank_secrets(self) -> "Settings":
        for name in ("firebase_project_id", "firebase_service_account", "fcm_server_key"):
            value = getattr(self, name)
            if value is not None and not value.strip():
                setattr(self, name, None)
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
