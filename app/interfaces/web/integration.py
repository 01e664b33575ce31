"""Query parameters of the Vercel integration handoff."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from urllib.parse import urlencode


@dataclass(frozen=True)
class IntegrationParams:
    code: str | None = None
    next: str | None = None
    configuration_id: str | None = None

    @classmethod
    def from_query(cls, query: Mapping[str, str]) -> "IntegrationParams":
        return cls(
            code=query.get("code") or None,
            next=query.get("next") or None,
            configuration_id=query.get("configurationId") or None,
        )

    @property
    def is_from_vercel(self) -> bool:
        return bool(self.code and self.next)

    def signup_link(self) -> str:
        if not self.is_from_vercel:
            return "/auth/signup"
        return "/auth/signup?" + urlencode(
            {"code": self.code, "next": self.next, "configurationId": self.configuration_id or ""}
        )

    def github_link(self, api_root: str) -> str:
        base = f"{api_root.rstrip('/')}/auth/github"
        if not self.is_from_vercel:
            return base
        return base + "?" + urlencode(
            {
                "partnerCode": self.code,
                "next": self.next,
                "configurationId": self.configuration_id or "",
            }
        )


__all__ = ["IntegrationParams"]
