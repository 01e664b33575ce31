"""Domain entities describing workflows and subscriber preferences."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ChannelType(str, Enum):
    """Delivery channels a workflow may use."""

    IN_APP = "in_app"
    EMAIL = "email"
    SMS = "sms"
    CHAT = "chat"
    PUSH = "push"


@dataclass
class NotificationTemplate:
    """Workflow definition whose channels a subscriber can opt out of."""

    id: str | None
    organization_id: str
    environment_id: str
    name: str
    active: bool = True
    critical: bool = False
    channels: list[ChannelType] = field(default_factory=list)
    preference_settings: dict[ChannelType, bool] = field(default_factory=dict)


@dataclass
class SubscriberPreference:
    """Per-template channel choices stored for one subscriber."""

    id: str | None
    organization_id: str
    environment_id: str
    subscriber_id: str
    template_id: str
    enabled: bool = True
    channels: dict[ChannelType, bool] = field(default_factory=dict)


__all__ = ["ChannelType", "NotificationTemplate", "SubscriberPreference"]
