"""Common validation helpers for user use cases."""

from __future__ import annotations

import re
from collections.abc import Iterable

from app.domain.exceptions import ValidationError

_PHONE_PATTERN = re.compile(r"^\+?[0-9 ()-]{7,20}$")


def ensure_valid_email(email: str) -> str:
    """Return a normalized email address or raise :class:`ValidationError`."""

    normalized = (email or "").strip()
    if normalized.count("@") != 1:
        raise ValidationError("Email must be a valid email address")

    local_part, domain = normalized.split("@", 1)
    if not local_part or "." not in domain:
        raise ValidationError("Email must be a valid email address")

    return f"{local_part}@{domain.lower()}"


def ensure_valid_phone(phone_number: str | None) -> str | None:
    if phone_number is None:
        return None
    normalized = phone_number.strip()
    if not normalized:
        return None
    if not _PHONE_PATTERN.match(normalized):
        raise ValidationError("Phone number must contain only digits and an optional leading +")
    return normalized


def ensure_name(value: str, field_name: str) -> str:
    normalized = (value or "").strip()
    if not normalized:
        raise ValidationError(f"{field_name} is required")
    return normalized


def normalize_preferences(values: Iterable[str] | None) -> set[str]:
    return {value.strip() for value in values or () if value and value.strip()}
