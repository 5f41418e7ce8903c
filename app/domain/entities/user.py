"""Domain entity representing a notification subscriber."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class User:
    """A person subscribed to watch release notifications."""

    id: int | None
    first_name: str
    last_name: str
    email: str
    phone_number: str | None = None
    is_active: bool = True
    email_enabled: bool = True
    sms_enabled: bool = False
    push_enabled: bool = True
    preferences: set[str] = field(default_factory=set)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def can_receive_sms(self) -> bool:
        """SMS opt-in only counts when a phone number is on file."""

        return self.sms_enabled and bool(self.phone_number)

    def shares_preference(self, tags: set[str] | frozenset[str]) -> bool:
        return not self.preferences.isdisjoint(tags)
