"""Realtime notification helpers for the infrastructure layer."""

from .manager import NotificationConnectionManager, notification_manager
from .publisher import (
    RealtimeEventPublisher,
    realtime_event_publisher,
    serialize_notification,
)

__all__ = [
    "NotificationConnectionManager",
    "notification_manager",
    "RealtimeEventPublisher",
    "realtime_event_publisher",
    "serialize_notification",
]
