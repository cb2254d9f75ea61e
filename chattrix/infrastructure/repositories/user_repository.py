"""Persistence layer for user data."""

from __future__ import annotations

from sqlalchemy import or_
from sqlalchemy.orm import Session

from chattrix.domain.entities import User
from chattrix.infrastructure.models import UserModel
from chattrix.utils import from_db_datetime, to_db_datetime


class UserRepository:
    """Provide lookup and creation operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_login(self, login: str) -> User | None:
        """Return the user whose username or email equals ``login``."""

        model = (
            self.session.query(UserModel)
            .filter(or_(UserModel.username == login, UserModel.email == login))
            .first()
        )
        return self._to_entity(model) if model else None

    def exists(self, *, username: str, email: str) -> bool:
        query = self.session.query(UserModel.id).filter(
            or_(UserModel.username == username, UserModel.email == email)
        )
        return query.first() is not None

    def create(self, user: User) -> User:
        model = UserModel(
            username=user.username,
            full_name=user.full_name,
            email=user.email,
            password=user.password,
            profile_image=user.profile_image,
            is_active=user.is_active,
        )
        if user.created_at is not None:
            model.created_at = to_db_datetime(user.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            username=model.username,
            full_name=model.full_name,
            email=model.email,
            password=model.password,
            profile_image=model.profile_image,
            is_active=model.is_active,
            created_at=from_db_datetime(model.created_at),
        )


__all__ = ["UserRepository"]
