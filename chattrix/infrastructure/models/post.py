"""SQLAlchemy model for posts referenced by notifications."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from chattrix.infrastructure.database import Base
from chattrix.utils import now_in_app_naive_datetime


class PostModel(Base):
    __tablename__ = "post"

    id = Column(Integer, primary_key=True, index=True)
    author_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    image_url = Column(String(500), nullable=True)
    caption = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
