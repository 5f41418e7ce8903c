"""Domain entity representing a tracked watch release."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal


@dataclass
class WatchRelease:
    """An announced watch with a scheduled availability date."""

    id: int | None
    name: str
    brand: str
    model_number: str | None = None
    description: str | None = None
    release_date: datetime | None = None
    price: Decimal | None = None
    currency: str = "USD"
    features: set[str] = field(default_factory=set)
    categories: set[str] = field(default_factory=set)
    image_url: str | None = None
    product_url: str | None = None
    is_limited_edition: bool = False
    limited_quantity: int | None = None
    notified: bool = False
    notified_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def mark_notified(self, at: datetime) -> None:
        """Flag the release as having gone through a dispatch pass at ``at``."""

        self.notified = True
        self.notified_at = at


__all__ = ["WatchRelease"]
