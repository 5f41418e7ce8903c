"""Load sample subscribers and watch releases into an empty database."""

from __future__ import annotations

import argparse
import logging
from datetime import timedelta
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.releases import create_release
from app.application.use_cases.users import create_user
from app.infrastructure.database import SessionLocal, initialize_database
from app.infrastructure.repositories import UserRepository, WatchReleaseRepository
from app.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

SAMPLE_USERS = (
    {
        "first_name": "John",
        "last_name": "Doe",
        "email": "john.doe@example.com",
        "phone_number": "+1234567890",
        "email_enabled": True,
        "sms_enabled": False,
        "push_enabled": True,
        "preferences": ("luxury", "automatic", "swiss"),
    },
    {
        "first_name": "Jane",
        "last_name": "Smith",
        "email": "jane.smith@example.com",
        "phone_number": "+1987654321",
        "email_enabled": True,
        "sms_enabled": True,
        "push_enabled": True,
        "preferences": ("sport", "quartz", "japanese"),
    },
    {
        "first_name": "Mike",
        "last_name": "Johnson",
        "email": "mike.johnson@example.com",
        "phone_number": "+1555123456",
        "email_enabled": False,
        "sms_enabled": True,
        "push_enabled": True,
        "preferences": ("dive", "automatic", "german"),
    },
)

# (release date offset in days, fields)
SAMPLE_RELEASES = (
    (
        7,
        {
            "name": "Chronograph Master",
            "brand": "Swiss Luxury",
            "model_number": "SL-2024-001",
            "description": "A premium automatic chronograph with moon phase complication",
            "price": Decimal("8500.00"),
            "features": ("automatic", "chronograph", "moon-phase", "sapphire-crystal"),
            "categories": ("luxury", "swiss", "automatic"),
            "image_url": "https://example.com/images/chronograph-master.jpg",
            "product_url": "https://example.com/watches/chronograph-master",
            "is_limited_edition": True,
            "limited_quantity": 500,
        },
    ),
    (
        3,
        {
            "name": "Dive Pro 300",
            "brand": "SportTech",
            "model_number": "ST-DP300-2024",
            "description": "Professional diving watch with 300m water resistance",
            "price": Decimal("1200.00"),
            "features": ("quartz", "dive", "luminous", "rotating-bezel"),
            "categories": ("sport", "dive", "quartz"),
            "image_url": "https://example.com/images/dive-pro-300.jpg",
            "product_url": "https://example.com/watches/dive-pro-300",
        },
    ),
    (
        -1,
        {
            "name": "Seiko Presage",
            "brand": "Seiko",
            "model_number": "SPB123J1",
            "description": "Elegant automatic watch with enamel dial",
            "price": Decimal("650.00"),
            "features": ("automatic", "enamel-dial", "sapphire-crystal", "date"),
            "categories": ("japanese", "automatic", "dress"),
            "image_url": "https://example.com/images/seiko-presage.jpg",
            "product_url": "https://example.com/watches/seiko-presage",
        },
    ),
    (
        14,
        {
            "name": "Precision Master",
            "brand": "German Craft",
            "model_number": "GC-PM-2024",
            "description": "High-precision automatic movement with power reserve indicator",
            "price": Decimal("3200.00"),
            "features": ("automatic", "power-reserve", "german-movement", "sapphire-crystal"),
            "categories": ("german", "automatic", "luxury"),
            "image_url": "https://example.com/images/precision-master.jpg",
            "product_url": "https://example.com/watches/precision-master",
            "is_limited_edition": True,
            "limited_quantity": 200,
        },
    ),
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Load sample users and watch releases for local development.",
    )
    parser.add_argument(
        "--skip-users",
        action="store_true",
        help="Do not create the sample users",
    )
    parser.add_argument(
        "--skip-releases",
        action="store_true",
        help="Do not create the sample watch releases",
    )
    return parser.parse_args()


def seed_users(session) -> int:
    """Create the sample users unless the table already has rows."""

    if UserRepository(session).list(limit=1):
        logger.info("Users already exist, skipping user creation")
        return 0
    for fields in SAMPLE_USERS:
        create_user(session, **fields)
    logger.info("Created %d sample users", len(SAMPLE_USERS))
    return len(SAMPLE_USERS)


def seed_releases(session) -> int:
    """Create the sample releases unless the table already has rows."""

    if WatchReleaseRepository(session).list(limit=1):
        logger.info("Watch releases already exist, skipping watch release creation")
        return 0
    now = now_in_app_timezone()
    for offset_days, fields in SAMPLE_RELEASES:
        create_release(session, release_date=now + timedelta(days=offset_days), **fields)
    logger.info("Created %d sample watch releases", len(SAMPLE_RELEASES))
    return len(SAMPLE_RELEASES)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s [%(name)s] %(message)s")
    args = parse_args()

    initialize_database()

    session = SessionLocal()
    try:
        users = 0 if args.skip_users else seed_users(session)
        releases = 0 if args.skip_releases else seed_releases(session)
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"Could not load sample data: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Database error while loading sample data: {exc}") from exc
    else:
        print(f"Sample data loaded: {users} users, {releases} watch releases")
    finally:
        session.close()


if __name__ == "__main__":
    main()
