"""Pydantic models for relationship settings."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class UserSummaryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    full_name: str
    profile_image: str | None = None


class MuteSettingsSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    posts: bool = False
    stories: bool = False
    all: bool = False


class RelationshipRead(BaseModel):
    """Settings the caller keeps for a followed account."""

    model_config = ConfigDict(from_attributes=True)

    following_id: int
    is_close_friend: bool
    is_favorite: bool
    mute_settings: MuteSettingsSchema
    is_restricted: bool
    following: UserSummaryRead | None = None


class RelationshipUpdate(BaseModel):
    """Partial update; omitted fields keep their stored value."""

    is_close_friend: bool | None = None
    is_favorite: bool | None = None
    mute_settings: MuteSettingsSchema | None = None
    is_restricted: bool | None = None


__all__ = [
    "MuteSettingsSchema",
    "RelationshipRead",
    "RelationshipUpdate",
    "UserSummaryRead",
]
