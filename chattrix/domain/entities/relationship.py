"""Domain entities describing how a user relates to someone they follow."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .user import UserSummary


@dataclass
class MuteSettings:
    """Content the follower chose to hide from the followed account."""

    posts: bool = False
    stories: bool = False
    all: bool = False


@dataclass
class UserRelationship:
    """Follower-side settings for a followed account."""

    id: int | None
    follower_id: int
    following_id: int
    is_close_friend: bool = False
    is_favorite: bool = False
    mute_settings: MuteSettings = field(default_factory=MuteSettings)
    is_restricted: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    following: UserSummary | None = None

    @classmethod
    def default_for(cls, follower_id: int, following_id: int) -> "UserRelationship":
        """Return the settings assumed when nothing was stored yet."""

        return cls(id=None, follower_id=follower_id, following_id=following_id)


__all__ = ["MuteSettings", "UserRelationship"]
