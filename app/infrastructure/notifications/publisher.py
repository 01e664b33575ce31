"""Utility helpers to push unseen/unread count changes to widget sockets."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from anyio import from_thread

from .manager import WidgetConnectionManager, widget_connection_manager

logger = logging.getLogger(__name__)

UNSEEN_COUNT_CHANGED = "unseen_count_changed"
UNREAD_COUNT_CHANGED = "unread_count_changed"


class CountChangePublisher:
    """Serialize count updates and schedule their delivery."""

    def __init__(self, manager: WidgetConnectionManager) -> None:
        self._manager = manager

    def dispatch(self, subscriber_id: str, *, unseen_count: int, unread_count: int) -> None:
        """Schedule both count events for ``subscriber_id``."""

        if not self._manager.is_connected(subscriber_id):
            return

        self._schedule(
            subscriber_id,
            {"type": UNSEEN_COUNT_CHANGED, "data": {"unseenCount": unseen_count}},
        )
        self._schedule(
            subscriber_id,
            {"type": UNREAD_COUNT_CHANGED, "data": {"unreadCount": unread_count}},
        )

    def _schedule(self, subscriber_id: str, message: dict[str, Any]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            try:
                from_thread.run(self._manager.send_to_subscriber, subscriber_id, message)
            except RuntimeError:
                # Called outside of an AnyIO worker thread, e.g. from a script.
                logger.debug(
                    "No event loop available to deliver %s to subscriber %s",
                    message["type"],
                    subscriber_id,
                )
        else:
            loop.create_task(self._manager.send_to_subscriber(subscriber_id, message))


count_change_publisher = CountChangePublisher(widget_connection_manager)


def dispatch_count_change(subscriber_id: str, *, unseen_count: int, unread_count: int) -> None:
    """Public helper that delegates to the shared publisher instance."""

    count_change_publisher.dispatch(
        subscriber_id, unseen_count=unseen_count, unread_count=unread_count
    )


__all__ = [
    "CountChangePublisher",
    "UNREAD_COUNT_CHANGED",
    "UNSEEN_COUNT_CHANGED",
    "count_change_publisher",
    "dispatch_count_change",
]
