"""Persistence helpers for follower relationship settings."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from chattrix.domain.entities import MuteSettings, UserRelationship, UserSummary
from chattrix.infrastructure.models import UserRelationshipModel
from chattrix.utils import from_db_datetime


class RelationshipRepository:
    """Read and upsert :class:`UserRelationship` records."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_follower(self, follower_id: int) -> Sequence[UserRelationship]:
        query = (
            self.session.query(UserRelationshipModel)
            .filter(UserRelationshipModel.follower_id == follower_id)
            .order_by(UserRelationshipModel.created_at.desc(), UserRelationshipModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, follower_id: int, following_id: int) -> UserRelationship | None:
        model = self._get_model(follower_id, following_id)
        return self._to_entity(model) if model else None

    def upsert(self, relationship: UserRelationship) -> UserRelationship:
        model = self._get_model(relationship.follower_id, relationship.following_id)
        if model is None:
            model = UserRelationshipModel(
                follower_id=relationship.follower_id,
                following_id=relationship.following_id,
            )
        model.is_close_friend = relationship.is_close_friend
        model.is_favorite = relationship.is_favorite
        model.mute_posts = relationship.mute_settings.posts
        model.mute_stories = relationship.mute_settings.stories
        model.mute_all = relationship.mute_settings.all
        model.is_restricted = relationship.is_restricted
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def _get_model(
        self, follower_id: int, following_id: int
    ) -> UserRelationshipModel | None:
        return (
            self.session.query(UserRelationshipModel)
            .filter(UserRelationshipModel.follower_id == follower_id)
            .filter(UserRelationshipModel.following_id == following_id)
            .first()
        )

    @staticmethod
    def _to_entity(model: UserRelationshipModel) -> UserRelationship:
        following = None
        if model.following is not None:
            following = UserSummary(
                id=model.following.id,
                username=model.following.username,
                full_name=model.following.full_name,
                profile_image=model.following.profile_image,
            )
        return UserRelationship(
            id=model.id,
            follower_id=model.follower_id,
            following_id=model.following_id,
            is_close_friend=model.is_close_friend,
            is_favorite=model.is_favorite,
            mute_settings=MuteSettings(
                posts=model.mute_posts,
                stories=model.mute_stories,
                all=model.mute_all,
            ),
            is_restricted=model.is_restricted,
            created_at=from_db_datetime(model.created_at),
            updated_at=from_db_datetime(model.updated_at),
            following=following,
        )


__all__ = ["RelationshipRepository"]
