"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class NotificationSenderRead(BaseModel):
    """Display fields of the user who triggered the notification."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    full_name: str
    profile_image: str | None = None


class NotificationPostRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    image_url: str | None = None


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    recipient_id: int
    kind: str
    content: str | None = None
    read: bool
    created_at: datetime
    sender: NotificationSenderRead | None = None
    related_post: NotificationPostRead | None = None


class NotificationCreate(BaseModel):
    """Payload used to emit a notification on behalf of the caller."""

    recipient_id: int = Field(..., gt=0)
    kind: str = Field(..., description="like, comment, follow, message or system")
    content: str | None = Field(default=None, max_length=2000)
    related_post_id: int | None = Field(default=None, gt=0)


class UnreadCountResponse(BaseModel):
    count: int


class MessageResponse(BaseModel):
    message: str


__all__ = [
    "MessageResponse",
    "NotificationCreate",
    "NotificationPostRead",
    "NotificationRead",
    "NotificationSenderRead",
    "UnreadCountResponse",
]
