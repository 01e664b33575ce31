"""Client-side controllers for the dashboard web app."""

from .integration import IntegrationParams
from .login_form import (
    DEFAULT_LANDING_ROUTE,
    ErrorReporter,
    LoggingErrorReporter,
    LoginForm,
    LoginRequestError,
    LoginResult,
    LoginState,
)
from .session_context import SessionContext

__all__ = [
    "DEFAULT_LANDING_ROUTE",
    "ErrorReporter",
    "IntegrationParams",
    "LoggingErrorReporter",
    "LoginForm",
    "LoginRequestError",
    "LoginResult",
    "LoginState",
    "SessionContext",
]
