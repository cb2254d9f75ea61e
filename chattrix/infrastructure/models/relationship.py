"""SQLAlchemy model for follower-side relationship settings."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from chattrix.infrastructure.database import Base
from chattrix.utils import now_in_app_naive_datetime


class UserRelationshipModel(Base):
    """Settings a follower keeps for one followed account."""

    __tablename__ = "user_relationship"
    __table_args__ = (
        UniqueConstraint("follower_id", "following_id", name="uq_relationship_pair"),
    )

    id = Column(Integer, primary_key=True, index=True)
    follower_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    following_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    is_close_friend = Column(Boolean, nullable=False, default=False)
    is_favorite = Column(Boolean, nullable=False, default=False)
    mute_posts = Column(Boolean, nullable=False, default=False)
    mute_stories = Column(Boolean, nullable=False, default=False)
    mute_all = Column(Boolean, nullable=False, default=False)
    is_restricted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime, nullable=True, onupdate=now_in_app_naive_datetime)

    following = relationship("UserModel", foreign_keys=[following_id], lazy="joined")


__all__ = ["UserRelationshipModel"]
