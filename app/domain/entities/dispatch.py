"""Value objects exchanged with the notification dispatch engine."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from app.domain.exceptions import ValidationError


def _normalize_tags(values: Iterable[str] | None, *, name: str) -> frozenset[str]:
    if values is None:
        return frozenset()
    if isinstance(values, str):
        raise ValidationError(f"{name} must be a collection of strings, not a single string")
    tags: set[str] = set()
    for value in values:
        if not isinstance(value, str):
            raise ValidationError(f"{name} must only contain strings")
        stripped = value.strip()
        if stripped:
            tags.add(stripped)
    return frozenset(tags)


@dataclass(frozen=True)
class DispatchRequest:
    """Describe which release to announce, to whom and over which channels."""

    release_id: int
    categories: frozenset[str] = field(default_factory=frozenset)
    brands: frozenset[str] = field(default_factory=frozenset)
    send_email: bool = True
    send_sms: bool = False
    send_push: bool = True
    custom_message: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.release_id, bool) or not isinstance(self.release_id, int):
            raise ValidationError("release_id must be an integer")
        if self.release_id <= 0:
            raise ValidationError("release_id must be a positive integer")
        object.__setattr__(
            self, "categories", _normalize_tags(self.categories, name="categories")
        )
        object.__setattr__(self, "brands", _normalize_tags(self.brands, name="brands"))
        for flag in ("send_email", "send_sms", "send_push"):
            if not isinstance(getattr(self, flag), bool):
                raise ValidationError(f"{flag} must be a boolean")
        message = self.custom_message
        if message is not None and not isinstance(message, str):
            raise ValidationError("custom_message must be a string")
        object.__setattr__(self, "custom_message", (message or "").strip() or None)


@dataclass(frozen=True)
class RenderedMessage:
    """Channel-ready content produced for one user."""

    subject: str
    body: str


@dataclass(frozen=True)
class DispatchOutcome:
    """Summary returned by a dispatch pass."""

    sent: int = 0
    failed: int = 0
    skipped: int = 0

    @property
    def attempted(self) -> int:
        return self.sent + self.failed


__all__ = ["DispatchOutcome", "DispatchRequest", "RenderedMessage"]
