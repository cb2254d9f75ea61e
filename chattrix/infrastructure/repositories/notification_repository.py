"""Persistence helpers for notification entities."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from chattrix.domain.entities import (
    Notification,
    NotificationPostSummary,
    NotificationSender,
)
from chattrix.domain.exceptions import (
    NotificationNotFoundError,
    NotificationPersistenceError,
)
from chattrix.infrastructure.models import NotificationModel
from chattrix.utils import (
    from_db_datetime,
    now_in_app_timezone,
    to_db_datetime,
)

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 50
# Largest value a signed 64-bit INTEGER primary key can hold.
MAX_NOTIFICATION_ID = 2**63 - 1


class NotificationRepository:
    """Provide query and update operations for :class:`Notification` objects.

    Every method commits its own unit of work. Database failures are rolled
    back and surfaced as :class:`NotificationPersistenceError`.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_recipient(
        self,
        recipient_id: int,
        *,
        limit: int | None = DEFAULT_LIST_LIMIT,
    ) -> Sequence[Notification]:
        with self._guard("list notifications"):
            query = self._ordered_query(recipient_id)
            if limit is not None:
                query = query.limit(limit)
            return [self._to_entity(model) for model in query.all()]

    def list_unread_for_recipient(
        self, recipient_id: int, *, limit: int | None = DEFAULT_LIST_LIMIT
    ) -> Sequence[Notification]:
        with self._guard("list unread notifications"):
            query = self._ordered_query(recipient_id).filter(
                NotificationModel.read.is_(False)
            )
            if limit is not None:
                query = query.limit(limit)
            return [self._to_entity(model) for model in query.all()]

    def count_unread(self, recipient_id: int) -> int:
        with self._guard("count unread notifications"):
            return (
                self.session.query(NotificationModel)
                .filter(NotificationModel.recipient_id == recipient_id)
                .filter(NotificationModel.read.is_(False))
                .count()
            )

    def get(self, notification_id: int) -> Notification | None:
        with self._guard("load notification"):
            if not _in_id_range(notification_id):
                return None
            model = self.session.get(NotificationModel, notification_id)
            return self._to_entity(model) if model else None

    def create(self, notification: Notification) -> Notification:
        with self._guard("create notification"):
            model = NotificationModel(
                recipient_id=notification.recipient_id,
                sender_id=notification.sender_id,
                kind=notification.kind,
                content=notification.content,
                related_post_id=notification.related_post_id,
                read=False,
                created_at=to_db_datetime(
                    notification.created_at or now_in_app_timezone()
                ),
            )
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
            return self._to_entity(model)

    def mark_read(
        self, notification_id: int, *, recipient_id: int | None = None
    ) -> Notification:
        with self._guard("mark notification as read"):
            model = self._get_owned_model(notification_id, recipient_id)
            if not model.read:
                model.read = True
                self.session.add(model)
                self.session.commit()
                self.session.refresh(model)
            return self._to_entity(model)

    def mark_all_read(self, recipient_id: int) -> int:
        with self._guard("mark all notifications as read"):
            updated = (
                self.session.query(NotificationModel)
                .filter(NotificationModel.recipient_id == recipient_id)
                .filter(NotificationModel.read.is_(False))
                .update({NotificationModel.read: True}, synchronize_session=False)
            )
            self.session.commit()
            # The bulk update bypasses the identity map.
            self.session.expire_all()
            return updated

    def delete(
        self, notification_id: int, *, recipient_id: int | None = None
    ) -> Notification:
        with self._guard("delete notification"):
            model = self._get_owned_model(notification_id, recipient_id)
            removed = self._to_entity(model)
            self.session.delete(model)
            self.session.commit()
            return removed

    def _ordered_query(self, recipient_id: int):
        return (
            self.session.query(NotificationModel)
            .filter(NotificationModel.recipient_id == recipient_id)
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
        )

    def _get_owned_model(
        self, notification_id: int, recipient_id: int | None
    ) -> NotificationModel:
        if not _in_id_range(notification_id):
            raise NotificationNotFoundError(notification_id)
        model = self.session.get(NotificationModel, notification_id)
        if model is None:
            raise NotificationNotFoundError(notification_id)
        if recipient_id is not None and model.recipient_id != recipient_id:
            # Someone else's notification is reported exactly like a missing one.
            raise NotificationNotFoundError(notification_id)
        return model

    @contextmanager
    def _guard(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Failed to %s", action)
            raise NotificationPersistenceError(f"Could not {action}") from exc

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        sender = None
        if model.sender is not None:
            sender = NotificationSender(
                id=model.sender.id,
                username=model.sender.username,
                full_name=model.sender.full_name,
                profile_image=model.sender.profile_image,
            )
        related_post = None
        if model.related_post is not None:
            related_post = NotificationPostSummary(
                id=model.related_post.id,
                image_url=model.related_post.image_url,
            )
        return Notification(
            id=model.id,
            recipient_id=model.recipient_id,
            kind=model.kind,
            sender_id=model.sender_id,
            content=model.content,
            related_post_id=model.related_post_id,
            read=bool(model.read),
            created_at=from_db_datetime(model.created_at),
            sender=sender,
            related_post=related_post,
        )


def _in_id_range(notification_id: int) -> bool:
    return 0 < notification_id <= MAX_NOTIFICATION_ID


__all__ = ["DEFAULT_LIST_LIMIT", "NotificationRepository"]
