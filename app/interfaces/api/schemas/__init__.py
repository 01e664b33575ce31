from .auth import AuthErrorDetail, LoginRequest, LoginResponse
from .widget import (
    BrandingRead,
    ChannelPreferenceBody,
    CountResponse,
    FeedResponse,
    LogUsageRequest,
    LogUsageResponse,
    MarkAllRequest,
    MarkFlagsBody,
    MarkMessageAsRequest,
    MessageActionRequest,
    MessageRead,
    OrganizationResponse,
    PreferenceRead,
    PreferenceTemplateRead,
    SessionInitializeRequest,
    SessionInitializeResponse,
    SubscriberPreferenceResponse,
    SubscriberProfile,
    UpdateSubscriberPreferenceRequest,
)

__all__ = [
    "AuthErrorDetail",
    "BrandingRead",
    "ChannelPreferenceBody",
    "CountResponse",
    "FeedResponse",
    "LoginRequest",
    "LoginResponse",
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
