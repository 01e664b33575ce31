"""Lookups shared by the widget use cases."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Subscriber
from app.infrastructure.notifications import dispatch_count_change
from app.infrastructure.repositories import (
    FeedRepository,
    MessageRepository,
    SubscriberRepository,
)

from .commands import SubscriberCommand
from .errors import WidgetNotFoundError


def resolve_subscriber(session: Session, command: SubscriberCommand) -> Subscriber:
    """Return the subscriber the command was issued for."""

    subscriber = SubscriberRepository(session).get_by_subscriber_id(
        environment_id=command.environment_id, subscriber_id=command.subscriber_id
    )
    if subscriber is None:
        raise WidgetNotFoundError("Subscriber not found")
    return subscriber


def resolve_feed_ids(
    session: Session, identifiers: Sequence[str] | None, *, environment_id: str
) -> list[str] | None:
    """Translate feed identifiers into feed ids.

    ``None`` means every feed. Identifiers without a matching feed are dropped,
    so a filter made only of unknown identifiers matches no message.
    """

    if not identifiers:
        return None
    feeds = FeedRepository(session).list_by_identifiers(
        identifiers, environment_id=environment_id
    )
    return [feed.id for feed in feeds if feed.id]


def publish_counts(session: Session, subscriber: Subscriber) -> None:
    """Push the current unseen/unread counts to the subscriber's open widgets."""

    repository = MessageRepository(session)
    unseen = repository.count(
        environment_id=subscriber.environment_id, subscriber_id=subscriber.id, seen=False
    )
    unread = repository.count(
        environment_id=subscriber.environment_id, subscriber_id=subscriber.id, read=False
    )
    dispatch_count_change(subscriber.id, unseen_count=unseen, unread_count=unread)
