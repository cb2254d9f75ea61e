"""Producer-side helpers that turn social activity into notifications."""

from __future__ import annotations

from chattrix.domain.entities import Notification, NotificationKind

from .service import NotificationService

_MAX_SNIPPET_LENGTH = 120


def _snippet(text: str | None) -> str | None:
    if not text:
        return None
    text = " ".join(text.split())
    if len(text) <= _MAX_SNIPPET_LENGTH:
        return text
    return text[: _MAX_SNIPPET_LENGTH - 1].rstrip() + "…"


def notify_post_liked(
    service: NotificationService, *, post_author_id: int, liker_id: int, post_id: int
) -> Notification | None:
    """Tell a post author someone liked their post."""

    if post_author_id == liker_id:
        return None
    return service.create(
        recipient_id=post_author_id,
        sender_id=liker_id,
        kind=NotificationKind.LIKE,
        related_post_id=post_id,
    )


def notify_post_commented(
    service: NotificationService,
    *,
    post_author_id: int,
    commenter_id: int,
    post_id: int,
    comment: str,
) -> Notification | None:
    """Tell a post author about a new comment, carrying a short snippet."""

    if post_author_id == commenter_id:
        return None
    return service.create(
        recipient_id=post_author_id,
        sender_id=commenter_id,
        kind=NotificationKind.COMMENT,
        content=_snippet(comment),
        related_post_id=post_id,
    )


def notify_user_followed(
    service: NotificationService, *, followed_id: int, follower_id: int
) -> Notification | None:
    if followed_id == follower_id:
        return None
    return service.create(
        recipient_id=followed_id,
        sender_id=follower_id,
        kind=NotificationKind.FOLLOW,
    )


def notify_message_received(
    service: NotificationService, *, recipient_id: int, sender_id: int, text: str
) -> Notification | None:
    if recipient_id == sender_id:
        return None
    return service.create(
        recipient_id=recipient_id,
        sender_id=sender_id,
        kind=NotificationKind.MESSAGE,
        content=_snippet(text),
    )


def notify_system(
    service: NotificationService, *, recipient_id: int, message: str
) -> Notification:
    """Send a notification with no sender, e.g. policy or account notices."""

    return service.create(
        recipient_id=recipient_id,
        kind=NotificationKind.SYSTEM,
        content=message,
    )


__all__ = [
    "notify_message_received",
    "notify_post_commented",
    "notify_post_liked",
    "notify_system",
    "notify_user_followed",
]
