"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./watch_notify.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    app_timezone: str = Field(
        default="UTC",
        description="IANA timezone name (or UTC+HH:MM offset) used for timestamps",
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Origins allowed to call the API from a browser",
    )

    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending release emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of release emails",
        min_length=3,
    )

    twilio_account_sid: str | None = Field(default=None, description="Twilio account SID")
    twilio_auth_token: str | None = Field(default=None, description="Twilio auth token")
    twilio_from_number: str | None = Field(
        default=None, description="Phone number SMS messages are sent from"
    )

    push_gateway_url: str | None = Field(
        default=None,
        description="Base URL of the ntfy-compatible push gateway",
    )
    push_access_token: str | None = Field(
        default=None, description="Bearer token for the push gateway, if required"
    )
    push_topic_prefix: str = Field(
        default="watch-notify",
        description="Prefix prepended to every per-user push topic",
    )

    dispatch_channel_timeout_seconds: float = Field(
        default=10.0,
        description="Maximum time a single channel send may take before it is failed",
        gt=0,
    )
    dispatch_max_concurrency: int = Field(
        default=8,
        description="Maximum number of channel sends running at the same time",
        ge=1,
    )

    scheduler_enabled: bool = Field(
        default=True, description="Start the release scan jobs with the application"
    )
    new_release_scan_minutes: int = Field(default=30, gt=0)
    upcoming_release_scan_minutes: int = Field(default=60, gt=0)
    limited_edition_scan_minutes: int = Field(default=15, gt=0)

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self

    @model_validator(mode="after")
    def _validate_twilio_credentials(self) -> "Settings":
        values = (self.twilio_account_sid, self.twilio_auth_token, self.twilio_from_number)
        if any(values) and not all(values):
            raise ValueError(
                "TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN and TWILIO_FROM_NUMBER must all be "
                "provided to enable SMS"
            )
        return self

    @property
    def email_configured(self) -> bool:
        return bool(self.sendgrid_api_key and self.sendgrid_sender)

    @property
    def sms_configured(self) -> bool:
        return bool(self.twilio_account_sid and self.twilio_auth_token and self.twilio_from_number)

    @property
    def push_configured(self) -> bool:
        return bool(self.push_gateway_url)


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


__all__ = ["Settings", "get_settings"]
