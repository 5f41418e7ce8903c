"""Run a single notification dispatch for one watch release."""

from __future__ import annotations

import argparse
import logging

import anyio
from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.notifications import build_dispatch_engine
from app.config import get_settings
from app.domain.entities import DispatchOutcome, DispatchRequest
from app.infrastructure.channels import build_channel_senders
from app.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Send notifications about a watch release to its subscribers.",
    )
    parser.add_argument("release_id", type=int, help="Identifier of the watch release")
    parser.add_argument(
        "--category",
        action="append",
        default=[],
        dest="categories",
        help="Only notify users with this preference (repeatable)",
    )
    parser.add_argument(
        "--brand",
        action="append",
        default=[],
        dest="brands",
        help="Only notify email subscribers with this brand as a preference (repeatable)",
    )
    parser.add_argument("--no-email", action="store_true", help="Skip the email channel")
    parser.add_argument("--sms", action="store_true", help="Also send SMS messages")
    parser.add_argument("--no-push", action="store_true", help="Skip the push channel")
    parser.add_argument("--message", default=None, help="Custom paragraph for the message")
    return parser.parse_args()


async def _dispatch(request: DispatchRequest) -> DispatchOutcome:
    settings = get_settings()
    senders = build_channel_senders(settings)
    session = SessionLocal()
    try:
        return await build_dispatch_engine(session, senders, settings).dispatch(request)
    finally:
        session.close()


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(), format="%(levelname)s [%(name)s] %(message)s"
    )
    args = parse_args()

    try:
        request = DispatchRequest(
            release_id=args.release_id,
            categories=frozenset(args.categories),
            brands=frozenset(args.brands),
            send_email=not args.no_email,
            send_sms=args.sms,
            send_push=not args.no_push,
            custom_message=args.message,
        )
    except ValueError as exc:
        raise SystemExit(f"Invalid dispatch request: {exc}") from exc

    initialize_database()

    try:
        outcome = anyio.run(_dispatch, request)
    except ValueError as exc:
        raise SystemExit(f"Dispatch failed: {exc}") from exc
    except SQLAlchemyError as exc:
        raise SystemExit(f"Database error during dispatch: {exc}") from exc

    print(
        f"Release {args.release_id}: {outcome.sent} sent, "
        f"{outcome.failed} failed, {outcome.skipped} skipped"
    )


if __name__ == "__main__":
    main()
