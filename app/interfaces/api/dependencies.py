"""FastAPI dependency utilities."""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.application.ports import ChannelSenderSet
from app.application.use_cases.notifications import DispatchEngine, build_dispatch_engine
from app.config import get_settings
from app.infrastructure.channels import build_channel_senders
from app.infrastructure.database import get_db


def get_channel_senders(request: Request) -> ChannelSenderSet:
    """Return the senders built at startup, building them lazily if missing."""

    senders = getattr(request.app.state, "channel_senders", None)
    if senders is None:
        senders = build_channel_senders(get_settings())
        request.app.state.channel_senders = senders
    return senders


def get_dispatch_engine(
    db: Session = Depends(get_db),
    senders: ChannelSenderSet = Depends(get_channel_senders),
) -> DispatchEngine:
    """Return a dispatch engine bound to the request's database session."""

    return build_dispatch_engine(db, senders, get_settings())
