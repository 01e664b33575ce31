"""Headless login form for the dashboard.

The view binds inputs to :meth:`LoginForm.submit` and renders
``field_errors`` / ``banner`` from the returned :class:`LoginResult`.
"""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

import httpx

from app.domain.entities import AUTH_ERROR_MESSAGES, AuthErrorCode

from .integration import IntegrationParams
from .session_context import SessionContext

logger = logging.getLogger(__name__)

LOGIN_PATH = "/auth/login"
DEFAULT_LANDING_ROUTE = "/templates"
EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")

_FIELD_MESSAGES: dict[AuthErrorCode, tuple[str, str]] = {
    AuthErrorCode.USER_NOT_FOUND: ("email", "Account does not exist"),
    AuthErrorCode.INVALID_EMAIL: ("email", "Please provide a valid email"),
    AuthErrorCode.WRONG_CREDENTIALS: ("password", "Invalid password"),
}
_CODES_BY_MESSAGE = {message: code for code, message in AUTH_ERROR_MESSAGES.items()}


class ErrorReporter(Protocol):
    """Error tracking collaborator (Sentry or similar)."""

    def capture_exception(self, error: BaseException) -> None: ...


class LoggingErrorReporter:
    def capture_exception(self, error: BaseException) -> None:
        logger.error("Login request failed", exc_info=error)


class LoginState(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


class LoginRequestError(Exception):
    """Failed call to the login endpoint."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        code: AuthErrorCode | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code

    @classmethod
    def from_response(cls, response: httpx.Response) -> "LoginRequestError":
        try:
            body = response.json()
        except ValueError:
            body = None
        message, code = _parse_error_body(body)
        return cls(
            message or response.reason_phrase or "Unexpected error",
            status_code=response.status_code,
            code=code,
        )


@dataclass
class LoginResult:
    state: LoginState
    field_errors: dict[str, str] = field(default_factory=dict)
    banner: str | None = None
    token: str | None = None


def _first(value: Any) -> Any:
    if isinstance(value, list):
        return value[0] if value else None
    return value


def _parse_error_body(body: Any) -> tuple[str | None, AuthErrorCode | None]:
    """Extract the message and structured code from an error response."""

    if not isinstance(body, Mapping):
        return None, None

    detail = body.get("detail", body)
    if isinstance(detail, list):
        # FastAPI request validation errors.
        first = _first(detail)
        message = first.get("msg") if isinstance(first, Mapping) else None
        return (str(message) if message else None), None
    if isinstance(detail, str):
        return detail, None
    if not isinstance(detail, Mapping):
        return None, None

    message = _first(detail.get("message"))
    code = None
    raw_code = detail.get("code")
    if raw_code:
        try:
            code = AuthErrorCode(raw_code)
        except ValueError:
            code = None
    return (str(message) if message is not None else None), code


def classify_error(error: LoginRequestError) -> tuple[dict[str, str], str | None]:
    """Map a failed login to field errors, or to a banner message.

    The structured ``code`` wins; servers that only send the message are
    matched on the exact text.
    """

    code = error.code or _CODES_BY_MESSAGE.get(error.message)
    if code in _FIELD_MESSAGES:
        field_name, text = _FIELD_MESSAGES[code]
        return {field_name: text}, None
    return {}, error.message


def validate_credentials(email: str | None, password: str | None) -> dict[str, str]:
    errors: dict[str, str] = {}
    if not email:
        errors["email"] = "Please provide an email"
    elif not EMAIL_PATTERN.match(email):
        errors["email"] = "Please provide a valid email"
    if not password:
        errors["password"] = "Please input a password"
    return errors


class LoginForm:
    """Collect credentials, call the API once and route on the outcome."""

    def __init__(
        self,
        client: httpx.Client,
        session: SessionContext,
        navigate: Callable[[str], None],
        *,
        error_reporter: ErrorReporter | None = None,
        integration: IntegrationParams | None = None,
    ) -> None:
        self._client = client
        self._session = session
        self._navigate = navigate
        self._error_reporter = error_reporter or LoggingErrorReporter()
        self.integration = integration or IntegrationParams()
        self._in_flight = threading.Lock()
        self.state = LoginState.IDLE
        self.last_result: LoginResult | None = None

    @property
    def is_loading(self) -> bool:
        """Drives the disabled/loading state of the submit button."""

        return self.state is LoginState.SUBMITTING

    @property
    def show_forgot_password(self) -> bool:
        return not self.integration.is_from_vercel

    def signup_link(self) -> str:
        return self.integration.signup_link()

    def github_link(self, api_root: str) -> str:
        return self.integration.github_link(api_root)

    def submit(self, email: str | None, password: str | None) -> LoginResult:
        """Validate, send the credentials and apply the outcome.

        A submit made while another is in flight is ignored and returns the
        ``SUBMITTING`` state without sending a request.
        """

        field_errors = validate_credentials(email, password)
        if field_errors:
            return self._finish(LoginResult(state=self.state, field_errors=field_errors))

        if not self._in_flight.acquire(blocking=False):
            return LoginResult(state=LoginState.SUBMITTING)
        try:
            self.state = LoginState.SUBMITTING
            try:
                token = self._request_token(email, password)
            except LoginRequestError as exc:
                return self._fail(exc)

            self._session.set_token(token)
            result = self._finish(LoginResult(state=LoginState.SUCCESS, token=token))
            if not self.integration.is_from_vercel:
                self._navigate(DEFAULT_LANDING_ROUTE)
            return result
        finally:
            self._in_flight.release()

    def _request_token(self, email: str, password: str) -> str:
        try:
            response = self._client.post(LOGIN_PATH, json={"email": email, "password": password})
        except httpx.HTTPError as exc:
            raise LoginRequestError(str(exc) or "Network error") from exc

        if response.is_error:
            raise LoginRequestError.from_response(response)

        try:
            body = response.json()
        except ValueError as exc:
            raise LoginRequestError(
                "Login response is not valid JSON", status_code=response.status_code
            ) from exc
        if not isinstance(body, Mapping):
            raise LoginRequestError(
                "Login response has an unexpected shape", status_code=response.status_code
            )

        token = body.get("token")
        if not token:
            raise LoginRequestError(
                "Login response did not include a token", status_code=response.status_code
            )
        return token

    def _fail(self, error: LoginRequestError) -> LoginResult:
        if error.status_code != 400:
            self._error_reporter.capture_exception(error)
        field_errors, banner = classify_error(error)
        return self._finish(
            LoginResult(state=LoginState.FAILED, field_errors=field_errors, banner=banner)
        )

    def _finish(self, result: LoginResult) -> LoginResult:
        self.state = result.state
        self.last_result = result
        return result


__all__ = [
    "DEFAULT_LANDING_ROUTE",
    "ErrorReporter",
    "LoggingErrorReporter",
    "LoginForm",
    "LoginRequestError",
    "LoginResult",
    "LoginState",
    "classify_error",
    "validate_credentials",
]
