import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.infrastructure.channels import build_channel_senders, close_channel_senders
from app.infrastructure.database import engine, initialize_database
from app.infrastructure.scheduler import build_release_scan_scheduler
from app.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare the database, channel senders and scan jobs; release them on shutdown."""

    settings = get_settings()
    initialize_database()
    senders = build_channel_senders(settings)
    app.state.channel_senders = senders

    scheduler = None
    if settings.scheduler_enabled:
        scheduler = build_release_scan_scheduler(senders, settings)
        scheduler.start()
        logger.info("Release scan scheduler started")
    else:
        logger.info("Release scan scheduler disabled")

    yield

    if scheduler is not None:
        scheduler.shutdown(wait=False)
    close_channel_senders(senders)
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(title="Watch Release Notifications", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
