"""Use case for listing a page of the subscriber's in-app feed."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.config import get_settings
from app.domain.entities import Message
from app.infrastructure.repositories import MessageRepository

from ._shared import resolve_feed_ids, resolve_subscriber
from .commands import GetNotificationsFeedCommand


@dataclass(frozen=True)
class FeedPage:
    data: Sequence[Message]
    total_count: int
    page_size: int
    page: int


def get_notifications_feed(session: Session, command: GetNotificationsFeedCommand) -> FeedPage:
    """Return the requested page of messages, newest first."""

    subscriber = resolve_subscriber(session, command)
    feed_ids = resolve_feed_ids(
        session, command.feed_id, environment_id=command.environment_id
    )
    page_size = get_settings().widget_page_size
    page = max(command.page or 0, 0)

    repository = MessageRepository(session)
    filters = {
        "environment_id": command.environment_id,
        "subscriber_id": subscriber.id,
        "feed_ids": feed_ids,
        "seen": command.seen,
        "read": command.read,
    }
    messages = repository.list_feed(**filters, skip=page * page_size, limit=page_size)
    total = repository.count(**filters)
    return FeedPage(data=messages, total_count=total, page_size=page_size, page=page)
