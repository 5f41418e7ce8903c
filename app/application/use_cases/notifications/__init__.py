"""Notification dispatch core: recipient selection, fan-out and scan jobs."""

from .content import (
    render_email,
    render_message,
    render_push,
    render_sms,
    render_test_message,
)
from .dispatch import DispatchEngine, eligible_channels
from .factory import build_dispatch_engine, build_release_scanner
from .queries import (
    count_sent_notifications_for_user,
    list_notifications_by_date_range,
    list_notifications_by_status,
    list_user_notifications,
)
from .recipients import RecipientSelector
from .scans import ReleaseScanner
from .test_messages import send_test_message, send_test_push

__all__ = [
    "DispatchEngine",
    "RecipientSelector",
    "ReleaseScanner",
    "build_dispatch_engine",
    "build_release_scanner",
    "count_sent_notifications_for_user",
    "eligible_channels",
    "list_notifications_by_date_range",
    "list_notifications_by_status",
    "list_user_notifications",
    "render_email",
    "render_message",
    "render_push",
    "render_sms",
    "render_test_message",
    "send_test_message",
    "send_test_push",
]
