"""Persistence layer for watch releases."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from app.domain.entities import WatchRelease
from app.infrastructure.models import (
    WatchReleaseCategoryModel,
    WatchReleaseFeatureModel,
    WatchReleaseModel,
)
from app.utils import ensure_app_naive_datetime, ensure_app_timezone


class WatchReleaseRepository:
    """Provide CRUD and scan queries for :class:`WatchRelease` entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self, skip: int = 0, limit: int | None = 100) -> Sequence[WatchRelease]:
        query = self.session.query(WatchReleaseModel).order_by(WatchReleaseModel.id)
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def get(self, release_id: int) -> WatchRelease | None:
        model = self.session.get(WatchReleaseModel, release_id)
        return self._to_entity(model) if model else None

    def create(self, release: WatchRelease) -> WatchRelease:
        model = WatchReleaseModel()
        self._apply_entity_to_model(model, release, include_creation_fields=True)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, release: WatchRelease) -> WatchRelease:
        if release.id is None:
            raise ValueError("Watch release id is required for updates")
        model = self.session.get(WatchReleaseModel, release.id)
        if model is None:
            msg = f"Watch release with id {release.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, release, include_creation_fields=False)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, release_id: int) -> bool:
        model = self.session.get(WatchReleaseModel, release_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    def mark_notified(self, release_id: int, notified_at: datetime) -> WatchRelease | None:
        """Set the notified flag and timestamp without touching other fields."""

        model = self.session.get(WatchReleaseModel, release_id)
        if model is None:
            return None
        model.notified = True
        model.notified_at = ensure_app_naive_datetime(notified_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_unnotified(self) -> Sequence[WatchRelease]:
        query = (
            self.session.query(WatchReleaseModel)
            .filter(WatchReleaseModel.notified.is_(False))
            .order_by(WatchReleaseModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def list_upcoming(self, since: datetime) -> Sequence[WatchRelease]:
        """Return releases dated on or after ``since``, soonest first."""

        query = (
            self.session.query(WatchReleaseModel)
            .filter(WatchReleaseModel.release_date >= ensure_app_naive_datetime(since))
            .order_by(WatchReleaseModel.release_date.asc(), WatchReleaseModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def list_limited_editions(self) -> Sequence[WatchRelease]:
        query = (
            self.session.query(WatchReleaseModel)
            .filter(WatchReleaseModel.is_limited_edition.is_(True))
            .order_by(WatchReleaseModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def list_by_brands(self, brands: Iterable[str]) -> Sequence[WatchRelease]:
        names = sorted({brand for brand in brands if brand})
        if not names:
            return []
        query = (
            self.session.query(WatchReleaseModel)
            .filter(WatchReleaseModel.brand.in_(names))
            .order_by(WatchReleaseModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def list_by_release_date_between(
        self, start: datetime, end: datetime
    ) -> Sequence[WatchRelease]:
        query = (
            self.session.query(WatchReleaseModel)
            .filter(WatchReleaseModel.release_date >= ensure_app_naive_datetime(start))
            .filter(WatchReleaseModel.release_date <= ensure_app_naive_datetime(end))
            .order_by(WatchReleaseModel.release_date.asc(), WatchReleaseModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _sync_tags(collection: list, wanted: Iterable[str], factory, attribute: str) -> None:
        """Make ``collection`` hold exactly ``wanted``, reusing rows that stay."""

        wanted_set = {value for value in wanted if value}
        for child in list(collection):
            value = getattr(child, attribute)
            if value in wanted_set:
                wanted_set.discard(value)
            else:
                collection.remove(child)
        for value in sorted(wanted_set):
            collection.append(factory(**{attribute: value}))

    @classmethod
    def _apply_entity_to_model(
        cls,
        model: WatchReleaseModel,
        release: WatchRelease,
        *,
        include_creation_fields: bool,
    ) -> None:
        if include_creation_fields and release.created_at is not None:
            model.created_at = ensure_app_naive_datetime(release.created_at)
        model.name = release.name
        model.brand = release.brand
        model.model_number = release.model_number
        model.description = release.description
        model.release_date = ensure_app_naive_datetime(release.release_date)
        model.price = release.price
        model.currency = release.currency or "USD"
        model.image_url = release.image_url
        model.product_url = release.product_url
        model.is_limited_edition = bool(release.is_limited_edition)
        model.limited_quantity = release.limited_quantity
        model.notified = bool(release.notified)
        model.notified_at = ensure_app_naive_datetime(release.notified_at)
        cls._sync_tags(model.features, release.features, WatchReleaseFeatureModel, "feature")
        cls._sync_tags(
            model.categories, release.categories, WatchReleaseCategoryModel, "category"
        )

    @staticmethod
    def _to_entity(model: WatchReleaseModel) -> WatchRelease:
        return WatchRelease(
            id=model.id,
            name=model.name,
            brand=model.brand,
            model_number=model.model_number,
            description=model.description,
            release_date=ensure_app_timezone(model.release_date),
            price=model.price,
            currency=model.currency,
            features={item.feature for item in model.features},
            categories={item.category for item in model.categories},
            image_url=model.image_url,
            product_url=model.product_url,
            is_limited_edition=model.is_limited_edition,
            limited_quantity=model.limited_quantity,
            notified=model.notified,
            notified_at=ensure_app_timezone(model.notified_at),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["WatchReleaseRepository"]
