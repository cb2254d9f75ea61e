"""Domain entities exposed by the application."""

from .notification import (
    NOTIFICATION_KINDS,
    Notification,
    NotificationKind,
    NotificationPostSummary,
    NotificationSender,
)
from .relationship import MuteSettings, UserRelationship
from .user import User, UserSummary

__all__ = [
    "NOTIFICATION_KINDS",
    "Notification",
    "NotificationKind",
    "NotificationPostSummary",
    "NotificationSender",
    "MuteSettings",
    "UserRelationship",
    "User",
    "UserSummary",
]
