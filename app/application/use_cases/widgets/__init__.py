"""Use cases behind the subscriber widget API."""

from .errors import WidgetNotFoundError, WidgetRequestError
from .get_feed_count import get_feed_count
from .get_notifications_feed import FeedPage, get_notifications_feed
from .get_organization_data import get_organization_data
from .initialize_session import WidgetSession, initialize_session
from .log_usage import log_usage
from .mark_all_messages_as import mark_all_messages_as
from .mark_message_as import mark_message_as
from .preferences import (
    TemplatePreference,
    get_subscriber_preference,
    update_subscriber_preference,
)
from .remove_message import remove_message
from .update_message_actions import update_message_actions

__all__ = [
    "FeedPage",
    "TemplatePreference",
    "WidgetNotFoundError",
    "WidgetRequestError",
    "WidgetSession",
    "get_feed_count",
    "get_notifications_feed",
    "get_organization_data",
    "get_subscriber_preference",
    "initialize_session",
    "log_usage",
    "mark_all_messages_as",
    "mark_message_as",
    "remove_message",
    "update_message_actions",
    "update_subscriber_preference",
]
