"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.domain.entities import NotificationChannel, NotificationStatus


class DispatchRequestIn(BaseModel):
    """Body accepted by ``POST /api/notifications/send``."""

    model_config = ConfigDict(extra="forbid")

    release_id: int = Field(..., ge=1)
    categories: list[str] = Field(default_factory=list)
    brands: list[str] = Field(default_factory=list)
    send_email: bool = True
    send_sms: bool = False
    send_push: bool = True
    custom_message: str | None = Field(default=None, max_length=2000)


class DispatchOutcomeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    sent: int
    failed: int
    skipped: int
    attempted: int


class NotificationAttemptRead(BaseModel):
    """Representation of a recorded delivery attempt."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    release_id: int
    channel: NotificationChannel
    status: NotificationStatus
    subject: str | None = None
    message: str | None = None
    recipient: str | None = None
    sent_at: datetime | None = None
    error_message: str | None = None
    retry_count: int = 0
    created_at: datetime | None = None


class NotificationCountRead(BaseModel):
    user_id: int
    sent: int


class ChannelCheckRead(BaseModel):
    """Result of a one-off test delivery."""

    channel: NotificationChannel
    recipient: str
    detail: str


__all__ = [
    "DispatchOutcomeRead",
    "DispatchRequestIn",
    "NotificationAttemptRead",
    "NotificationCountRead",
    "ChannelCheckRead",
]
