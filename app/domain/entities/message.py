"""Domain entity representing a delivered in-app message."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

CHANNEL_IN_APP = "in_app"


class ButtonType(str, Enum):
    """Buttons an in-app message can render."""

    PRIMARY = "primary"
    SECONDARY = "secondary"


class MessageActionStatus(str, Enum):
    """Outcome recorded for a message call-to-action."""

    PENDING = "pending"
    DONE = "done"


@dataclass
class Message:
    """Notification instance that belongs to a single subscriber."""

    id: str | None
    organization_id: str
    environment_id: str
    subscriber_id: str
    content: str
    template_id: str | None = None
    feed_id: str | None = None
    channel: str = CHANNEL_IN_APP
    payload: dict[str, Any] = field(default_factory=dict)
    cta: dict[str, Any] = field(default_factory=dict)
    seen: bool = False
    read: bool = False
    last_seen_date: datetime | None = None
    last_read_date: datetime | None = None
    deleted: bool = False
    created_at: datetime | None = None


__all__ = [
    "ButtonType",
    "CHANNEL_IN_APP",
    "Message",
    "MessageActionStatus",
]
