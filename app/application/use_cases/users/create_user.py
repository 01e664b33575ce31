"""Use case for creating dashboard users."""

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import get_password_hash

from .validators import normalize_email


def create_user(
    session: Session,
    *,
    email: str,
    password: str,
    organization_id: str | None = None,
    first_name: str | None = None,
    last_name: str | None = None,
) -> User:
    """Create a new user ensuring unique email addresses."""

    normalized = normalize_email(email)
    repository = UserRepository(session)
    if repository.get_by_email(normalized):
        raise ValueError("A user with this email already exists")
    if not password:
        raise ValueError("Password is required")

    return repository.create(
        User(
            id=None,
            organization_id=organization_id,
            email=normalized,
            password=get_password_hash(password),
            first_name=first_name,
            last_name=last_name,
        )
    )
