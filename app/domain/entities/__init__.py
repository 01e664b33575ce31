"""Domain entities exposed by the application."""

from .feed import Feed
from .message import (
    CHANNEL_IN_APP,
    ButtonType,
    Message,
    MessageActionStatus,
)
from .notification_template import (
    ChannelType,
    NotificationTemplate,
    SubscriberPreference,
)
from .organization import Branding, Environment, Organization
from .subscriber import Subscriber, SubscriberSession
from .user import AUTH_ERROR_MESSAGES, AuthErrorCode, User

__all__ = [
    "AUTH_ERROR_MESSAGES",
    "AuthErrorCode",
    "Branding",
    "ButtonType",
    "CHANNEL_IN_APP",
    "ChannelType",
    "Environment",
    "Feed",
    "Message",
    "MessageActionStatus",
    "NotificationTemplate",
    "Organization",
    "Subscriber",
    "SubscriberPreference",
    "SubscriberSession",
    "User",
]
