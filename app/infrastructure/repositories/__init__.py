"""Repository implementations for infrastructure layer."""

from .feed_repository import FeedRepository
from .message_repository import MessageRepository
from .notification_template_repository import (
    NotificationTemplateRepository,
    SubscriberPreferenceRepository,
)
from .organization_repository import EnvironmentRepository, OrganizationRepository
from .subscriber_repository import SubscriberRepository
from .user_repository import UserRepository

__all__ = [
    "EnvironmentRepository",
    "FeedRepository",
    "MessageRepository",
    "NotificationTemplateRepository",
    "OrganizationRepository",
    "SubscriberPreferenceRepository",
    "SubscriberRepository",
    "UserRepository",
]
