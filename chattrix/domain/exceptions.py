"""Errors raised by the notification domain."""

from __future__ import annotations


class NotificationError(Exception):
    """Base class for notification failures."""


class NotificationValidationError(NotificationError, ValueError):
    """The caller supplied an unknown kind or omitted a required field."""


class NotificationNotFoundError(NotificationError, LookupError):
    """The referenced notification does not exist for the caller."""

    def __init__(self, notification_id: int) -> None:
        super().__init__(f"Notification with id {notification_id} not found")
        self.notification_id = notification_id


class NotificationPersistenceError(NotificationError):
    """The notification store was unreachable or rejected the write."""


__all__ = [
    "NotificationError",
    "NotificationValidationError",
    "NotificationNotFoundError",
    "NotificationPersistenceError",
]
