"""Authentication related schemas."""

from pydantic import BaseModel

from app.domain.entities import AuthErrorCode


class LoginRequest(BaseModel):
    # Validated by the use case so a malformed address maps to INVALID_EMAIL.
    email: str
    password: str


class LoginResponse(BaseModel):
    token: str


class AuthErrorDetail(BaseModel):
    code: AuthErrorCode
    message: str
