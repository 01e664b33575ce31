"""ORM models used by the application infrastructure."""

from .feed import FeedModel
from .message import MessageModel
from .notification_template import NotificationTemplateModel, SubscriberPreferenceModel
from .organization import EnvironmentModel, OrganizationModel
from .subscriber import SubscriberModel
from .user import UserModel

__all__ = [
    "EnvironmentModel",
    "FeedModel",
    "MessageModel",
    "NotificationTemplateModel",
    "OrganizationModel",
    "SubscriberModel",
    "SubscriberPreferenceModel",
    "UserModel",
]
