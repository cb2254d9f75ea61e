"""Shared fixtures: a throwaway SQLite database and a recording dispatcher."""

from __future__ import annotations

import os
from pathlib import Path

TEST_DB_PATH = Path(__file__).parent / "test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["APP_TIMEZONE"] = "UTC"

import pytest

from chattrix.application.use_cases.notifications import NotificationService
from chattrix.domain.entities import User
from chattrix.infrastructure import database
from chattrix.infrastructure.models import PostModel
from chattrix.infrastructure.repositories import NotificationRepository, UserRepository
from chattrix.infrastructure.security import get_password_hash

TEST_PASSWORD = "Secret123"


class RecordingDispatcher:
    """Dispatcher double that keeps every published event in memory."""

    def __init__(self) -> None:
        self.events: list[tuple[int, str, object]] = []

    def publish(self, user_id, event_name, payload) -> None:
        self.events.append((user_id, event_name, payload))

    def named(self, event_name: str) -> list[tuple[int, str, object]]:
        return [event for event in self.events if event[1] == event_name]


@pytest.fixture(autouse=True)
def reset_database():
    """Give every test empty tables."""

    database.Base.metadata.drop_all(bind=database.engine)
    database.initialize_database()
    yield
    database.engine.dispose()


@pytest.fixture(scope="session", autouse=True)
def remove_test_database():
    yield
    database.engine.dispose()
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()


@pytest.fixture(scope="session")
def password_hash() -> str:
    return get_password_hash(TEST_PASSWORD)


@pytest.fixture()
def session():
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture()
def service(session, dispatcher) -> NotificationService:
    return NotificationService(NotificationRepository(session), dispatcher)


@pytest.fixture()
def make_user(session, password_hash):
    """Create users that can log in with ``TEST_PASSWORD``."""

    def _make_user(username: str, *, full_name: str | None = None, active: bool = True) -> User:
        return UserRepository(session).create(
            User(
                id=None,
                username=username,
                full_name=full_name or username.title(),
                email=f"{username}@example.com",
                password=password_hash,
                profile_image=f"https://cdn.example.com/{username}.png",
                is_active=active,
                created_at=None,
            )
        )

    return _make_user


@pytest.fixture()
def make_post(session):
    def _make_post(author: User, image_url: str = "https://cdn.example.com/p.jpg") -> int:
        post = PostModel(author_id=author.id, image_url=image_url, caption="sunset")
        session.add(post)
        session.commit()
        return post.id

    return _make_post
