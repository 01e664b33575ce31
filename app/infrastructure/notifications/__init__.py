"""Realtime notification helpers for the infrastructure layer."""

from .manager import WidgetConnectionManager, widget_connection_manager
from .publisher import (
    UNREAD_COUNT_CHANGED,
    UNSEEN_COUNT_CHANGED,
    CountChangePublisher,
    count_change_publisher,
    dispatch_count_change,
)

__all__ = [
    "CountChangePublisher",
    "UNREAD_COUNT_CHANGED",
    "UNSEEN_COUNT_CHANGED",
    "WidgetConnectionManager",
    "count_change_publisher",
    "dispatch_count_change",
    "widget_connection_manager",
]
