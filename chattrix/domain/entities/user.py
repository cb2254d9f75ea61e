"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    username: str
    full_name: str
    email: str
    password: str
    profile_image: str | None
    is_active: bool
    created_at: datetime | None


@dataclass(frozen=True)
class UserSummary:
    """Public display fields shown next to user generated content."""

    id: int
    username: str
    full_name: str
    profile_image: str | None = None
