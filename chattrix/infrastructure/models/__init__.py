"""ORM models used by the application infrastructure."""

from .notification import NotificationModel
from .post import PostModel
from .relationship import UserRelationshipModel
from .user import UserModel

__all__ = [
    "NotificationModel",
    "PostModel",
    "UserRelationshipModel",
    "UserModel",
]
