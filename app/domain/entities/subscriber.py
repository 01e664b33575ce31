"""Domain entities representing notification subscribers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Subscriber:
    """End user that receives notifications in an environment.

    ``subscriber_id`` is the identifier chosen by the customer while ``id`` is
    the internal identifier assigned on creation.
    """

    id: str | None
    organization_id: str
    environment_id: str
    subscriber_id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    avatar: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class SubscriberSession:
    """Authenticated widget context resolved from a subscriber token."""

    id: str
    organization_id: str
    environment_id: str
    subscriber_id: str


__all__ = ["Subscriber", "SubscriberSession"]
