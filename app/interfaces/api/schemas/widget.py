"""Pydantic models describing the subscriber widget payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from app.domain.entities import ChannelType, MessageActionStatus

from .base import CamelModel


class SessionInitializeRequest(CamelModel):
    subscriber_id: str = Field(..., min_length=1)
    application_identifier: str = Field(..., min_length=1)
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    hmac_hash: str | None = None


class SubscriberProfile(CamelModel):
    id: str = Field(..., alias="_id")
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None


class SessionInitializeResponse(CamelModel):
    token: str
    profile: SubscriberProfile


class MessageRead(CamelModel):
    """Message record as rendered by the inbox."""

    id: str = Field(..., alias="_id")
    template_id: str | None = Field(default=None, alias="_templateId")
    feed_id: str | None = Field(default=None, alias="_feedId")
    subscriber_id: str = Field(..., alias="_subscriberId")
    channel: str
    content: str
    payload: dict[str, Any] = Field(default_factory=dict)
    cta: dict[str, Any] = Field(default_factory=dict)
    seen: bool
    read: bool
    last_seen_date: datetime | None = None
    last_read_date: datetime | None = None
    created_at: datetime | None = None


class FeedResponse(CamelModel):
    data: list[MessageRead]
    total_count: int
    page_size: int
    page: int


class CountResponse(CamelModel):
    count: int


class MarkFlagsBody(CamelModel):
    seen: bool | None = None
    read: bool | None = None


class MarkMessageAsRequest(CamelModel):
    message_id: str | list[str] | None = None
    mark: MarkFlagsBody = Field(default_factory=MarkFlagsBody)


class MarkAllRequest(CamelModel):
    feed_id: str | list[str] | None = None


class MessageActionRequest(CamelModel):
    # Opaque JSON, stored as received.
    payload: Any = None
    status: MessageActionStatus


class BrandingRead(CamelModel):
    logo: str | None = None
    color: str | None = None
    font_color: str | None = None
    content_background: str | None = None
    font_family: str | None = None
    direction: str | None = None


class OrganizationResponse(CamelModel):
    id: str = Field(..., alias="_id")
    name: str
    branding: BrandingRead


class PreferenceTemplateRead(CamelModel):
    id: str = Field(..., alias="_id")
    name: str
    critical: bool


class PreferenceRead(CamelModel):
    enabled: bool
    channels: dict[ChannelType, bool]


class SubscriberPreferenceResponse(CamelModel):
    template: PreferenceTemplateRead
    preference: PreferenceRead


class ChannelPreferenceBody(CamelModel):
    type: ChannelType
    enabled: bool


class UpdateSubscriberPreferenceRequest(CamelModel):
    channel: ChannelPreferenceBody | None = None
    enabled: bool | None = None


class LogUsageRequest(CamelModel):
    name: str = Field(..., min_length=1)
    payload: dict[str, Any] = Field(default_factory=dict)


class LogUsageResponse(CamelModel):
    success: bool


__all__ = [
    "BrandingRead",
    "ChannelPreferenceBody",
    "CountResponse",
    "FeedResponse",
    "LogUsageRequest",
    "LogUsageResponse",
    "MarkAllRequest",
    "MarkFlagsBody",
    "MarkMessageAsRequest",
    "MessageActionRequest",
    "MessageRead",
    "OrganizationResponse",
    "PreferenceRead",
    "PreferenceTemplateRead",
    "SessionInitializeRequest",
    "SessionInitializeResponse",
    "SubscriberPreferenceResponse",
    "SubscriberProfile",
    "UpdateSubscriberPreferenceRequest",
]
