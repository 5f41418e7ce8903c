"""Use case for registering a new watch release."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal

from sqlalchemy.orm import Session

from app.domain.entities import WatchRelease
from app.infrastructure.repositories import WatchReleaseRepository

from .validators import normalize_currency, normalize_tags, validate_release_fields

logger = logging.getLogger(__name__)


def create_release(
    session: Session,
    *,
    name: str,
    brand: str,
    model_number: str | None = None,
    description: str | None = None,
    release_date: datetime | None = None,
    price: Decimal | None = None,
    currency: str | None = None,
    features: Iterable[str] = (),
    categories: Iterable[str] = (),
    image_url: str | None = None,
    product_url: str | None = None,
    is_limited_edition: bool = False,
    limited_quantity: int | None = None,
) -> WatchRelease:
    """Create a release; new releases always start unnotified."""

    validate_release_fields(
        name=name,
        brand=brand,
        price=price,
        is_limited_edition=is_limited_edition,
        limited_quantity=limited_quantity,
    )
    release = WatchRelease(
        id=None,
        name=name.strip(),
        brand=brand.strip(),
        model_number=model_number,
        description=description,
        release_date=release_date,
        price=price,
        currency=normalize_currency(currency),
        features=normalize_tags(features),
        categories=normalize_tags(categories),
        image_url=image_url,
        product_url=product_url,
        is_limited_edition=is_limited_edition,
        limited_quantity=limited_quantity,
        notified=False,
        notified_at=None,
    )
    saved = WatchReleaseRepository(session).create(release)
    logger.info("Created new watch release with ID: %s", saved.id)
    return saved
