"""Public helpers for creating, reading and updating notifications."""

from .events import (
    notify_message_received,
    notify_post_commented,
    notify_post_liked,
    notify_system,
    notify_user_followed,
)
from .service import (
    EVENT_ALL_READ,
    EVENT_DELETED,
    EVENT_NEW,
    EVENT_READ,
    NotificationDispatcher,
    NotificationService,
    build_notification_service,
)

__all__ = [
    "EVENT_ALL_READ",
    "EVENT_DELETED",
    "EVENT_NEW",
    "EVENT_READ",
    "NotificationDispatcher",
    "NotificationService",
    "build_notification_service",
    "notify_message_received",
    "notify_post_commented",
    "notify_post_liked",
    "notify_system",
    "notify_user_followed",
]
