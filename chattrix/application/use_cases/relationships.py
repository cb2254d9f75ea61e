"""Use cases for follower-side relationship settings."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from chattrix.domain.entities import MuteSettings, UserRelationship
from chattrix.infrastructure.repositories import RelationshipRepository, UserRepository


def list_relationships(session: Session, *, follower_id: int) -> Sequence[UserRelationship]:
    return RelationshipRepository(session).list_for_follower(follower_id)


def get_relationship(
    session: Session, *, follower_id: int, following_id: int
) -> UserRelationship:
    """Return the stored settings, or the defaults when none exist."""

    relationship = RelationshipRepository(session).get(follower_id, following_id)
    if relationship is None:
        return UserRelationship.default_for(follower_id, following_id)
    return relationship


def update_relationship(
    session: Session,
    *,
    follower_id: int,
    following_id: int,
    is_close_friend: bool | None = None,
    is_favorite: bool | None = None,
    mute_settings: MuteSettings | None = None,
    is_restricted: bool | None = None,
) -> UserRelationship:
    """Create or update the settings ``follower_id`` keeps for ``following_id``.

    Fields left as ``None`` keep their current value.
    """

    if follower_id == following_id:
        raise ValueError("Users cannot hold relationship settings for themselves")
    if UserRepository(session).get(following_id) is None:
        raise LookupError("User not found")

    current = get_relationship(
        session, follower_id=follower_id, following_id=following_id
    )
    if is_close_friend is not None:
        current.is_close_friend = is_close_friend
    if is_favorite is not None:
        current.is_favorite = is_favorite
    if mute_settings is not None:
        current.mute_settings = mute_settings
    if is_restricted is not None:
        current.is_restricted = is_restricted
    return RelationshipRepository(session).upsert(current)


__all__ = ["get_relationship", "list_relationships", "update_relationship"]
