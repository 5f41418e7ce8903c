"""Watch release schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WatchReleaseBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    brand: str = Field(..., min_length=1, max_length=120)
    model_number: str | None = Field(default=None, max_length=120)
    description: str | None = None
    release_date: datetime | None = None
    price: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    features: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)
    image_url: str | None = Field(default=None, max_length=500)
    product_url: str | None = Field(default=None, max_length=500)
    is_limited_edition: bool = False
    limited_quantity: int | None = Field(default=None, ge=1)


class WatchReleaseCreate(WatchReleaseBase):
    model_config = ConfigDict(extra="forbid")


class WatchReleaseUpdate(WatchReleaseBase):
    model_config = ConfigDict(extra="forbid")


class WatchReleaseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    brand: str
    model_number: str | None = None
    description: str | None = None
    release_date: datetime | None = None
    price: Decimal | None = None
    currency: str
    features: list[str]
    categories: list[str]
    image_url: str | None = None
    product_url: str | None = None
    is_limited_edition: bool
    limited_quantity: int | None = None
    notified: bool
    notified_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("features", "categories", mode="before")
    @classmethod
    def _sort_tags(cls, value):
        return sorted(value) if isinstance(value, (set, frozenset)) else value


__all__ = ["WatchReleaseCreate", "WatchReleaseRead", "WatchReleaseUpdate"]
