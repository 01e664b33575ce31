"""Tests for the dashboard login form controller."""

from __future__ import annotations

import httpx
import pytest

from app.interfaces.web import (
    DEFAULT_LANDING_ROUTE,
    IntegrationParams,
    LoginForm,
    LoginRequestError,
    LoginState,
    SessionContext,
)
from app.interfaces.web.login_form import classify_error, validate_credentials

EMAIL = "owner@acme.io"


class RecordingReporter:
    def __init__(self) -> None:
        self.errors: list[BaseException] = []

    def capture_exception(self, error: BaseException) -> None:
        self.errors.append(error)


def _build_form(handler, *, integration: IntegrationParams | None = None):
    requests: list[httpx.Request] = []

    def _recording_handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    client = httpx.Client(
        transport=httpx.MockTransport(_recording_handler), base_url="http://api.test"
    )
    session = SessionContext()
    navigations: list[str] = []
    reporter = RecordingReporter()
    form = LoginForm(
        client,
        session,
        navigations.append,
        error_reporter=reporter,
        integration=integration,
    )
    return form, session, navigations, reporter, requests


def test_successful_login_stores_token_and_navigates():
    form, session, navigations, reporter, requests = _build_form(
        lambda request: httpx.Response(200, json={"token": "jwt-token"})
    )

    result = form.submit(EMAIL, "password")

    assert result.state is LoginState.SUCCESS
    assert result.token == "jwt-token"
    assert session.token == "jwt-token"
    assert navigations == [DEFAULT_LANDING_ROUTE]
    assert reporter.errors == []
    [request] = requests
    assert request.url.path == "/auth/login"
    assert request.method == "POST"


def test_integration_entry_does_not_navigate():
    integration = IntegrationParams(code="abc", next="https://vercel.com/next")
    form, session, navigations, _, _ = _build_form(
        lambda request: httpx.Response(200, json={"token": "jwt-token"}),
        integration=integration,
    )

    result = form.submit(EMAIL, "password")

    assert result.state is LoginState.SUCCESS
    assert session.is_authenticated
    assert navigations == []
    assert form.show_forgot_password is False


def test_user_not_found_message_becomes_email_field_error():
    form, session, navigations, reporter, _ = _build_form(
        lambda request: httpx.Response(400, json={"message": "User not found"})
    )

    result = form.submit(EMAIL, "password")

    assert result.state is LoginState.FAILED
    assert result.field_errors == {"email": "Account does not exist"}
    assert result.banner is None
    assert session.token is None
    assert navigations == []
    assert reporter.errors == []


@pytest.mark.parametrize(
    ("code", "field_errors"),
    [
        ("USER_NOT_FOUND", {"email": "Account does not exist"}),
        ("INVALID_EMAIL", {"email": "Please provide a valid email"}),
        ("WRONG_CREDENTIALS", {"password": "Invalid password"}),
    ],
)
def test_structured_codes_map_to_field_errors(code, field_errors):
    body = {"detail": {"code": code, "message": "localized text"}}
    form, _, _, _, _ = _build_form(lambda request: httpx.Response(400, json=body))

    result = form.submit(EMAIL, "password")

    assert result.field_errors == field_errors
    assert result.banner is None


def test_unrecognized_400_is_shown_as_banner_without_reporting():
    form, _, _, reporter, _ = _build_form(
        lambda request: httpx.Response(400, json={"detail": "Account is locked"})
    )

    result = form.submit(EMAIL, "password")

    assert result.field_errors == {}
    assert result.banner == "Account is locked"
    assert reporter.errors == []


def test_server_error_is_reported_once_and_does_not_navigate():
    form, session, navigations, reporter, _ = _build_form(
        lambda request: httpx.Response(500, json={"detail": "Internal Server Error"})
    )

    result = form.submit(EMAIL, "password")

    assert result.state is LoginState.FAILED
    assert result.banner == "Internal Server Error"
    assert navigations == []
    assert session.token is None
    [error] = reporter.errors
    assert isinstance(error, LoginRequestError)
    assert error.status_code == 500


def test_transport_error_is_reported():
    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    form, _, navigations, reporter, _ = _build_form(_handler)

    result = form.submit(EMAIL, "password")

    assert result.state is LoginState.FAILED
    assert result.banner == "connection refused"
    assert len(reporter.errors) == 1
    assert reporter.errors[0].status_code is None
    assert navigations == []


def test_invalid_input_sends_no_request():
    form, _, _, _, requests = _build_form(
        lambda request: httpx.Response(200, json={"token": "jwt-token"})
    )

    result = form.submit("not-an-email", "")

    assert result.field_errors == {
        "email": "Please provide a valid email",
        "password": "Please input a password",
    }
    assert requests == []
    assert form.state is LoginState.IDLE


def test_submit_while_in_flight_is_ignored():
    nested = []

    def _handler(request: httpx.Request) -> httpx.Response:
        assert form.is_loading
        nested.append(form.submit(EMAIL, "password"))
        return httpx.Response(200, json={"token": "jwt-token"})

    form, _, navigations, _, requests = _build_form(_handler)

    result = form.submit(EMAIL, "password")

    assert result.state is LoginState.SUCCESS
    assert [item.state for item in nested] == [LoginState.SUBMITTING]
    assert len(requests) == 1
    assert navigations == [DEFAULT_LANDING_ROUTE]
    assert form.is_loading is False


def test_validate_credentials_requires_both_fields():
    assert validate_credentials(None, None) == {
        "email": "Please provide an email",
        "password": "Please input a password",
    }
    assert validate_credentials(EMAIL, "secret") == {}


def test_classify_error_prefers_code_over_message():
    error = LoginRequestError("User not found", status_code=400, code=None)
    assert classify_error(error) == ({"email": "Account does not exist"}, None)

    other = LoginRequestError("Something else", status_code=400)
    assert classify_error(other) == ({}, "Something else")


def test_session_context_notifies_listeners():
    session = SessionContext()
    seen: list[str | None] = []
    unsubscribe = session.subscribe(seen.append)

    session.set_token("abc")
    assert session.auth_headers() == {"Authorization": "Bearer abc"}
    session.clear()
    unsubscribe()
    session.set_token("def")

    assert seen == ["abc", None]
    with pytest.raises(ValueError):
        session.set_token("")


def test_integration_links_carry_partner_parameters():
    integration = IntegrationParams.from_query(
        {"code": "abc", "next": "/done", "configurationId": "cfg"}
    )

    assert integration.is_from_vercel
    assert integration.signup_link() == "/auth/signup?code=abc&next=%2Fdone&configurationId=cfg"
    assert integration.github_link("https://api.test/") == (
        "https://api.test/auth/github?partnerCode=abc&next=%2Fdone&configurationId=cfg"
    )
    assert IntegrationParams().signup_link() == "/auth/signup"


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>maintenance</html>"),
        httpx.Response(200, json=["unexpected"]),
    ],
    ids=["not-json", "not-an-object"],
)
def test_malformed_success_body_fails_and_is_reported(response):
    form, session, navigations, reporter, _ = _build_form(lambda request: response)

    result = form.submit(EMAIL, "password")

    assert result.state is LoginState.FAILED
    assert form.is_loading is False
    assert result.banner is not None
    assert session.token is None
    assert navigations == []
    [error] = reporter.errors
    assert error.status_code == 200
