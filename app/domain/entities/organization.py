"""Domain entities describing the tenant owning a widget."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Branding:
    """Visual settings the embedded inbox renders with."""

    logo: str | None = None
    color: str | None = None
    font_color: str | None = None
    content_background: str | None = None
    font_family: str | None = None
    direction: str | None = None


@dataclass
class Organization:
    """Customer account that owns environments, subscribers and messages."""

    id: str | None
    name: str
    branding: Branding = field(default_factory=Branding)
    created_at: datetime | None = None


@dataclass
class Environment:
    """Isolated space of an organization identified by its application identifier."""

    id: str | None
    organization_id: str
    name: str
    identifier: str
    api_key: str
    hmac_enabled: bool = False


__all__ = ["Branding", "Environment", "Organization"]
