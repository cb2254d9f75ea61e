"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from chattrix.domain.entities import NotificationKind
from chattrix.infrastructure.database import Base
from chattrix.utils import now_in_app_naive_datetime

_KIND_VALUES = ", ".join(f"'{kind.value}'" for kind in NotificationKind)


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"
    __table_args__ = (
        Index("ix_notification_recipient_created", "recipient_id", "created_at"),
        Index("ix_notification_read", "read"),
        CheckConstraint(f"kind IN ({_KIND_VALUES})", name="ck_notification_kind"),
    )

    id = Column(Integer, primary_key=True, index=True)
    recipient_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False
    )
    sender_id = Column(Integer, ForeignKey("user.id", ondelete="SET NULL"), nullable=True)
    kind = Column(String(20), nullable=False)
    content = Column(Text, nullable=True)
    related_post_id = Column(
        Integer, ForeignKey("post.id", ondelete="SET NULL"), nullable=True
    )
    read = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)

    sender = relationship("UserModel", foreign_keys=[sender_id], lazy="joined")
    related_post = relationship("PostModel", lazy="joined")


__all__ = ["NotificationModel"]
