"""Use cases for managing dashboard users."""

from .authenticate_user import AuthenticationStatus, authenticate_user
from .create_user import create_user
from .record_login import record_login

__all__ = [
    "AuthenticationStatus",
    "authenticate_user",
    "create_user",
    "record_login",
]
