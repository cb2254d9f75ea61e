"""Use case for creating users."""

from sqlalchemy.orm import Session

from chattrix.domain.entities import User
from chattrix.infrastructure.repositories import UserRepository
from chattrix.infrastructure.security import get_password_hash
from chattrix.utils import now_in_app_timezone


def create_user(
    session: Session,
    *,
    username: str,
    full_name: str,
    email: str,
    password: str,
    profile_image: str | None = None,
) -> User:
    """Create a new user ensuring unique usernames and email addresses."""

    repository = UserRepository(session)

    username = username.strip().lower()
    email = email.strip().lower()
    if not username:
        raise ValueError("The username cannot be empty")
    if repository.exists(username=username, email=email):
        raise ValueError("The username or email is already registered")

    user = User(
        id=None,
        username=username,
        full_name=full_name.strip() or username,
        email=email,
        password=get_password_hash(password),
        profile_image=profile_image,
        is_active=True,
        created_at=now_in_app_timezone(),
    )
    return repository.create(user)
