"""Domain entity representing a dashboard user."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class AuthErrorCode(str, Enum):
    """Stable codes returned by the login endpoint for validation failures."""

    USER_NOT_FOUND = "USER_NOT_FOUND"
    INVALID_EMAIL = "INVALID_EMAIL"
    WRONG_CREDENTIALS = "WRONG_CREDENTIALS"


AUTH_ERROR_MESSAGES: dict[AuthErrorCode, str] = {
    AuthErrorCode.USER_NOT_FOUND: "User not found",
    AuthErrorCode.INVALID_EMAIL: "email must be an email",
    AuthErrorCode.WRONG_CREDENTIALS: "Wrong credentials provided",
}


@dataclass
class User:
    """Organization member that signs into the dashboard."""

    id: str | None
    organization_id: str | None
    email: str
    password: str
    first_name: str | None = None
    last_name: str | None = None
    last_login: datetime | None = None
    created_at: datetime | None = None
