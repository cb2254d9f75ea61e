"""Pydantic schemas shared by the API routes."""

from .auth import Token
from .notification import (
    MessageResponse,
    NotificationCreate,
    NotificationPostRead,
    NotificationRead,
    NotificationSenderRead,
    UnreadCountResponse,
)
from .relationship import (
    MuteSettingsSchema,
    RelationshipRead,
    RelationshipUpdate,
    UserSummaryRead,
)

__all__ = [
    "Token",
    "MessageResponse",
    "NotificationCreate",
    "NotificationPostRead",
    "NotificationRead",
    "NotificationSenderRead",
    "UnreadCountResponse",
    "MuteSettingsSchema",
    "RelationshipRead",
    "RelationshipUpdate",
    "UserSummaryRead",
]
