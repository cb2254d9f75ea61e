"""Notification lifecycle: persist first, then notify connected sessions.

Every mutation is a two step operation. The repository write is committed
before the dispatcher is asked to push anything, and the dispatcher is
best-effort, so a push that never reaches the client leaves the stored state
untouched. Clients recover from missed events by re-fetching the list or the
unread count.

Unread counts published after ``mark_read``/``delete`` are recomputed from
the store right after the write. Two concurrent mutations for the same
recipient can therefore publish counts out of order; the persisted ``read``
flags are unaffected.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Protocol

from sqlalchemy.orm import Session

from chattrix.config import get_settings
from chattrix.domain.entities import NOTIFICATION_KINDS, Notification
from chattrix.domain.exceptions import NotificationValidationError
from chattrix.infrastructure.notifications import (
    realtime_event_publisher,
    serialize_notification,
)
from chattrix.infrastructure.repositories import NotificationRepository
from chattrix.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

EVENT_NEW = "notification:new"
EVENT_READ = "notification:read"
EVENT_ALL_READ = "notifications:allRead"
EVENT_DELETED = "notification:deleted"


class NotificationDispatcher(Protocol):
    """Per-user realtime channel used to push events to live sessions."""

    def publish(self, user_id: int, event_name: str, payload: Any) -> None:
        ...


class NotificationService:
    """Compose :class:`NotificationRepository` writes with dispatcher pushes."""

    def __init__(
        self,
        repository: NotificationRepository,
        dispatcher: NotificationDispatcher,
        *,
        list_limit: int | None = None,
    ) -> None:
        self._repository = repository
        self._dispatcher = dispatcher
        self._list_limit = list_limit or get_settings().notification_list_limit

    def create(
        self,
        *,
        recipient_id: int | None,
        kind: str | None,
        sender_id: int | None = None,
        content: str | None = None,
        related_post_id: int | None = None,
    ) -> Notification:
        """Persist a notification and push it to the recipient."""

        if not recipient_id:
            raise NotificationValidationError("A notification requires a recipient")
        if not kind:
            raise NotificationValidationError("A notification requires a kind")
        normalized_kind = str(getattr(kind, "value", kind))
        if normalized_kind not in NOTIFICATION_KINDS:
            allowed = ", ".join(sorted(NOTIFICATION_KINDS))
            raise NotificationValidationError(
                f"Unknown notification kind '{normalized_kind}'; expected one of: {allowed}"
            )

        saved = self._repository.create(
            Notification(
                id=None,
                recipient_id=recipient_id,
                kind=normalized_kind,
                sender_id=sender_id,
                content=content,
                related_post_id=related_post_id,
                read=False,
                created_at=now_in_app_timezone(),
            )
        )
        logger.info(
            "Created %s notification %s for user %s", saved.kind, saved.id, recipient_id
        )
        self._publish(recipient_id, EVENT_NEW, serialize_notification(saved))
        return saved

    def mark_read(self, notification_id: int, recipient_id: int) -> Notification:
        updated = self._repository.mark_read(notification_id, recipient_id=recipient_id)
        unread = self._repository.count_unread(recipient_id)
        self._publish(
            recipient_id,
            EVENT_READ,
            {"notificationId": updated.id, "unreadCount": unread},
        )
        return updated

    def mark_all_read(self, recipient_id: int) -> int:
        """Mark every unread notification of ``recipient_id`` as read.

        The published count is always zero; the bulk update is not re-checked.
        """

        updated = self._repository.mark_all_read(recipient_id)
        logger.info("Marked %d notifications as read for user %s", updated, recipient_id)
        self._publish(recipient_id, EVENT_ALL_READ, {"unreadCount": 0})
        return updated

    def delete(self, notification_id: int, recipient_id: int) -> Notification:
        removed = self._repository.delete(notification_id, recipient_id=recipient_id)
        unread = self._repository.count_unread(recipient_id)
        self._publish(
            recipient_id,
            EVENT_DELETED,
            {"notificationId": removed.id, "unreadCount": unread},
        )
        return removed

    def list_for_recipient(
        self, recipient_id: int, limit: int | None = None
    ) -> Sequence[Notification]:
        if limit is None or limit <= 0 or limit > self._list_limit:
            limit = self._list_limit
        return self._repository.list_for_recipient(recipient_id, limit=limit)

    def get_unread_count(self, recipient_id: int) -> int:
        return self._repository.count_unread(recipient_id)

    def list_pending(self, recipient_id: int) -> Sequence[Notification]:
        """Return the unread notifications used to prime a new websocket."""

        return self._repository.list_unread_for_recipient(
            recipient_id, limit=self._list_limit
        )

    def _publish(self, user_id: int, event_name: str, payload: Any) -> None:
        self._dispatcher.publish(user_id, event_name, payload)


def build_notification_service(
    session: Session, dispatcher: NotificationDispatcher | None = None
) -> NotificationService:
    """Return a service bound to ``session`` and the process-wide publisher."""

    return NotificationService(
        NotificationRepository(session),
        dispatcher if dispatcher is not None else realtime_event_publisher,
    )


__all__ = [
    "EVENT_ALL_READ",
    "EVENT_DELETED",
    "EVENT_NEW",
    "EVENT_READ",
    "NotificationDispatcher",
    "NotificationService",
    "build_notification_service",
]
