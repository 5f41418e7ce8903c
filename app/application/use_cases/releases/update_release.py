"""Use case for editing an existing watch release."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal

from sqlalchemy.orm import Session

from app.domain.entities import WatchRelease
from app.infrastructure.repositories import WatchReleaseRepository

from .get_release import get_release
from .validators import normalize_currency, normalize_tags, validate_release_fields

logger = logging.getLogger(__name__)


def update_release(
    session: Session,
    release_id: int,
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
    """Replace the descriptive fields of a release.

    The ``notified`` flag and its timestamp are left alone; only dispatch and
    :func:`mark_release_notified` change them.
    """

    release = get_release(session, release_id)
    validate_release_fields(
        name=name,
        brand=brand,
        price=price,
        is_limited_edition=is_limited_edition,
        limited_quantity=limited_quantity,
    )
    release.name = name.strip()
    release.brand = brand.strip()
    release.model_number = model_number
    release.description = description
    release.release_date = release_date
    release.price = price
    release.currency = normalize_currency(currency)
    release.features = normalize_tags(features)
    release.categories = normalize_tags(categories)
    release.image_url = image_url
    release.product_url = product_url
    release.is_limited_edition = is_limited_edition
    release.limited_quantity = limited_quantity

    updated = WatchReleaseRepository(session).update(release)
    logger.info("Updated watch release with ID: %s", updated.id)
    return updated
