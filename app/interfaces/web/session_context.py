"""Explicit holder for the dashboard session token."""

from __future__ import annotations

import threading
from collections.abc import Callable

TokenListener = Callable[[str | None], None]


class SessionContext:
    """Owns the token issued at login until logout or expiry.

    Components that need the token receive this object explicitly instead of
    reading shared global state.
    """

    def __init__(self) -> None:
        self._token: str | None = None
        self._lock = threading.Lock()
        self._listeners: list[TokenListener] = []

    @property
    def token(self) -> str | None:
        with self._lock:
            return self._token

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def set_token(self, token: str) -> None:
        if not token:
            raise ValueError("token must not be empty")
        with self._lock:
            self._token = token
        self._notify(token)

    def clear(self) -> None:
        """Forget the token (logout or expiry)."""

        with self._lock:
            self._token = None
        self._notify(None)

    def subscribe(self, listener: TokenListener) -> Callable[[], None]:
        """Call ``listener`` on every change; returns an unsubscribe function."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def auth_headers(self) -> dict[str, str]:
        token = self.token
        return {"Authorization": f"Bearer {token}"} if token else {}

    def _notify(self, token: str | None) -> None:
        for listener in list(self._listeners):
            listener(token)


__all__ = ["SessionContext"]
