"""Use case for counting the subscriber's in-app messages."""

from sqlalchemy.orm import Session

from app.infrastructure.repositories import MessageRepository

from ._shared import resolve_feed_ids, resolve_subscriber
from .commands import GetFeedCountCommand


def get_feed_count(session: Session, command: GetFeedCountCommand) -> int:
    """Count messages matching the feed and status filters; ``None`` flags match all."""

    subscriber = resolve_subscriber(session, command)
    feed_ids = resolve_feed_ids(
        session, command.feed_id, environment_id=command.environment_id
    )
    return MessageRepository(session).count(
        environment_id=command.environment_id,
        subscriber_id=subscriber.id,
        feed_ids=feed_ids,
        seen=command.seen,
        read=command.read,
    )
