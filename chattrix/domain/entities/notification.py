"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class NotificationKind(str, Enum):
    """Closed set of events a notification can describe."""

    LIKE = "like"
    COMMENT = "comment"
    FOLLOW = "follow"
    MESSAGE = "message"
    SYSTEM = "system"


NOTIFICATION_KINDS: frozenset[str] = frozenset(kind.value for kind in NotificationKind)


@dataclass(frozen=True)
class NotificationSender:
    """Display fields of the user who caused the notification."""

    id: int
    username: str
    full_name: str
    profile_image: str | None = None


@dataclass(frozen=True)
class NotificationPostSummary:
    """Display fields of the post a notification refers to."""

    id: int
    image_url: str | None = None


@dataclass
class Notification:
    """One event directed at one recipient.

    ``sender`` and ``related_post`` are only populated on records read back
    from the store; producers fill the ``*_id`` fields.
    """

    id: int | None
    recipient_id: int
    kind: str
    sender_id: int | None = None
    content: str | None = None
    related_post_id: int | None = None
    read: bool = False
    created_at: datetime | None = None
    sender: NotificationSender | None = None
    related_post: NotificationPostSummary | None = None


__all__ = [
    "NOTIFICATION_KINDS",
    "Notification",
    "NotificationKind",
    "NotificationPostSummary",
    "NotificationSender",
]
