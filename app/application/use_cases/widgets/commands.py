"""Immutable inputs passed from the widget routes to the use cases.

Tenant identifiers are copied from the authenticated :class:`SubscriberSession`
by :meth:`SubscriberCommand.from_session`; request bodies never provide them.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from app.domain.entities import (
    ButtonType,
    ChannelType,
    MessageActionStatus,
    SubscriberSession,
)

C = TypeVar("C", bound="SubscriberCommand")


@dataclass(frozen=True, kw_only=True)
class SubscriberCommand:
    organization_id: str
    environment_id: str
    subscriber_id: str

    @classmethod
    def from_session(cls: type[C], session: SubscriberSession, **fields: Any) -> C:
        """Build the command with the tenant identifiers of ``session``."""

        return cls(
            organization_id=session.organization_id,
            environment_id=session.environment_id,
            subscriber_id=session.subscriber_id,
            **fields,
        )


@dataclass(frozen=True, kw_only=True)
class InitializeSessionCommand:
    subscriber_id: str
    application_identifier: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    hmac_hash: str | None = None


@dataclass(frozen=True, kw_only=True)
class GetNotificationsFeedCommand(SubscriberCommand):
    page: int = 0
    feed_id: Sequence[str] | None = None
    seen: bool | None = None
    read: bool | None = None


@dataclass(frozen=True, kw_only=True)
class GetFeedCountCommand(SubscriberCommand):
    feed_id: Sequence[str] | None = None
    seen: bool | None = None
    read: bool | None = None


@dataclass(frozen=True)
class MarkFlags:
    """Status changes to apply; ``None`` leaves a flag untouched."""

    seen: bool | None = None
    read: bool | None = None


@dataclass(frozen=True, kw_only=True)
class MarkMessageAsCommand(SubscriberCommand):
    message_ids: Sequence[str]
    mark: MarkFlags


class MarkAllAs(str, Enum):
    SEEN = "seen"
    READ = "read"


@dataclass(frozen=True, kw_only=True)
class MarkAllMessagesAsCommand(SubscriberCommand):
    mark_as: MarkAllAs
    feed_ids: Sequence[str] | None = None


@dataclass(frozen=True, kw_only=True)
class RemoveMessageCommand(SubscriberCommand):
    message_id: str


@dataclass(frozen=True, kw_only=True)
class UpdateMessageActionsCommand(SubscriberCommand):
    message_id: str
    type: ButtonType
    status: MessageActionStatus
    # Opaque JSON, validated by whoever consumes the action result.
    payload: Any = None


@dataclass(frozen=True, kw_only=True)
class GetOrganizationDataCommand(SubscriberCommand):
    pass


@dataclass(frozen=True, kw_only=True)
class GetSubscriberPreferenceCommand(SubscriberCommand):
    pass


@dataclass(frozen=True)
class ChannelToggle:
    type: ChannelType
    enabled: bool


@dataclass(frozen=True, kw_only=True)
class UpdateSubscriberPreferenceCommand(SubscriberCommand):
    template_id: str
    channel: ChannelToggle | None = None
    enabled: bool | None = None


@dataclass(frozen=True, kw_only=True)
class LogUsageCommand(SubscriberCommand):
    name: str
    payload: dict[str, Any] = field(default_factory=dict)


__all__ = [
    "ChannelToggle",
    "GetFeedCountCommand",
    "GetNotificationsFeedCommand",
    "GetOrganizationDataCommand",
    "GetSubscriberPreferenceCommand",
    "InitializeSessionCommand",
    "LogUsageCommand",
    "MarkAllAs",
    "MarkAllMessagesAsCommand",
    "MarkFlags",
    "MarkMessageAsCommand",
    "RemoveMessageCommand",
    "SubscriberCommand",
    "UpdateMessageActionsCommand",
    "UpdateSubscriberPreferenceCommand",
]
