"""SQLAlchemy models for watch releases."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class WatchReleaseModel(Base):
    """Database representation of an announced watch release."""

    __tablename__ = "watch_release"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    brand = Column(String(120), nullable=False, index=True)
    model_number = Column(String(120), nullable=True)
    description = Column(Text, nullable=True)
    release_date = Column(DateTime(), nullable=True, index=True)
    price = Column(Numeric(12, 2), nullable=True)
    currency = Column(String(3), nullable=False, default="USD")
    image_url = Column(String(500), nullable=True)
    product_url = Column(String(500), nullable=True)
    is_limited_edition = Column(Boolean, nullable=False, default=False, index=True)
    limited_quantity = Column(Integer, nullable=True)
    notified = Column(Boolean, nullable=False, default=False, index=True)
    notified_at = Column(DateTime(), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime(), nullable=True, onupdate=now_in_app_naive_datetime)

    features = relationship(
        "WatchReleaseFeatureModel",
        lazy="selectin",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    categories = relationship(
        "WatchReleaseCategoryModel",
        lazy="selectin",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class WatchReleaseFeatureModel(Base):
    __tablename__ = "watch_release_feature"
    __table_args__ = (UniqueConstraint("release_id", "feature"),)

    id = Column(Integer, primary_key=True)
    release_id = Column(
        Integer, ForeignKey("watch_release.id", ondelete="CASCADE"), nullable=False, index=True
    )
    feature = Column(String(120), nullable=False)


class WatchReleaseCategoryModel(Base):
    __tablename__ = "watch_release_category"
    __table_args__ = (UniqueConstraint("release_id", "category"),)

    id = Column(Integer, primary_key=True)
    release_id = Column(
        Integer, ForeignKey("watch_release.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category = Column(String(120), nullable=False)


__all__ = ["WatchReleaseModel", "WatchReleaseFeatureModel", "WatchReleaseCategoryModel"]
