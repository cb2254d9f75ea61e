"""Repository implementations for infrastructure layer."""

from .notification_repository import NotificationRepository
from .relationship_repository import RelationshipRepository
from .user_repository import UserRepository

__all__ = [
    "NotificationRepository",
    "RelationshipRepository",
    "UserRepository",
]
