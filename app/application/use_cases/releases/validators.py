"""Validation helpers shared by the release use cases."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from app.domain.exceptions import ValidationError


def normalize_tags(values: Iterable[str] | None) -> set[str]:
    return {value.strip() for value in values or () if value and value.strip()}


def normalize_currency(currency: str | None) -> str:
    code = (currency or "USD").strip().upper()
    if len(code) != 3 or not code.isalpha():
        raise ValidationError("Currency must be a three letter ISO code")
    return code


def validate_release_fields(
    *,
    name: str,
    brand: str,
    price: Decimal | None,
    is_limited_edition: bool,
    limited_quantity: int | None,
) -> None:
    if not name or not name.strip():
        raise ValidationError("Watch name is required")
    if not brand or not brand.strip():
        raise ValidationError("Brand is required")
    if price is not None and price < 0:
        raise ValidationError("Price cannot be negative")
    if limited_quantity is not None and limited_quantity < 1:
        raise ValidationError("Limited quantity must be a positive number")
    if limited_quantity is not None and not is_limited_edition:
        raise ValidationError("Limited quantity only applies to limited edition releases")
