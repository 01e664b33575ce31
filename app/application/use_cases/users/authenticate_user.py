"""Use case for authenticating a dashboard user."""

from enum import Enum, auto

from sqlalchemy.orm import Session

from app.domain.entities import AuthErrorCode, User
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import verify_password

from .validators import normalize_email


class AuthenticationStatus(Enum):
    """Possible outcomes when attempting to authenticate a user."""

    SUCCESS = auto()
    INVALID_EMAIL = auto()
    USER_NOT_FOUND = auto()
    WRONG_CREDENTIALS = auto()

    @property
    def error_code(self) -> AuthErrorCode | None:
        """Return the client-facing code for a failed attempt."""

        if self is AuthenticationStatus.SUCCESS:
            return None
        return AuthErrorCode[self.name]


def authenticate_user(
    session: Session, email: str, password: str
) -> tuple[User | None, AuthenticationStatus]:
    """Return the authentication result along with the user when possible."""

    try:
        normalized = normalize_email(email)
    except ValueError:
        return None, AuthenticationStatus.INVALID_EMAIL

    user = UserRepository(session).get_by_email(normalized)
    if not user:
        return None, AuthenticationStatus.USER_NOT_FOUND

    if not verify_password(password, user.password):
        return None, AuthenticationStatus.WRONG_CREDENTIALS

    return user, AuthenticationStatus.SUCCESS
