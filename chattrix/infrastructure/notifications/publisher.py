"""Helpers to broadcast realtime events to connected clients."""

from __future__ import annotations

import asyncio
import copy
import logging
from dataclasses import asdict
from typing import Any

from anyio import from_thread

from chattrix.domain.entities import Notification

from .manager import NotificationConnectionManager, notification_manager

logger = logging.getLogger(__name__)


class RealtimeEventPublisher:
    """Dispatch named events to every websocket a user has open.

    Delivery is best-effort: events for users without a session, or raised
    while no event loop is reachable, are dropped. Sends are scheduled on the
    event loop and never awaited by the caller.
    """

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager
        self._pending: set[asyncio.Task[None]] = set()

    def publish(self, user_id: int, event_name: str, payload: Any) -> None:
        """Schedule ``event_name`` with ``payload`` for ``user_id``."""

        if not user_id:
            return

        message = {"type": event_name, "data": copy.deepcopy(payload)}
        self._schedule_send(user_id, message)

    def _schedule_send(self, user_id: int, message: dict[str, Any]) -> None:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            try:
                # Only the task creation runs on the loop; the send itself is
                # not waited for.
                from_thread.run_sync(self._spawn_send, user_id, message)
            except RuntimeError:
                logger.debug(
                    "No event loop available; dropping %s for user %s",
                    message["type"],
                    user_id,
                )
        else:
            self._spawn_send(user_id, message)

    def _spawn_send(self, user_id: int, message: dict[str, Any]) -> None:
        task = asyncio.get_running_loop().create_task(
            self._manager.send_to_user(user_id, message)
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    def pending_count(self) -> int:
        """Return the number of sends scheduled but not finished yet."""

        return len(self._pending)


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    return {
        "id": notification.id,
        "recipient_id": notification.recipient_id,
        "kind": notification.kind,
        "content": notification.content,
        "read": notification.read,
        "created_at": notification.created_at.isoformat()
        if notification.created_at
        else None,
        "sender": asdict(notification.sender) if notification.sender else None,
        "related_post": asdict(notification.related_post)
        if notification.related_post
        else None,
    }


realtime_event_publisher = RealtimeEventPublisher(notification_manager)


__all__ = [
    "RealtimeEventPublisher",
    "realtime_event_publisher",
    "serialize_notification",
]
