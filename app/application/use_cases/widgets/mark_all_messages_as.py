"""Use case for flagging every unseen or unread message at once."""

import logging

from sqlalchemy.orm import Session

from app.infrastructure.repositories import MessageRepository
from app.utils import now_in_app_timezone

from ._shared import publish_counts, resolve_feed_ids, resolve_subscriber
from .commands import MarkAllMessagesAsCommand

logger = logging.getLogger(__name__)


def mark_all_messages_as(session: Session, command: MarkAllMessagesAsCommand) -> int:
    """Mark all matching messages and return how many changed."""

    subscriber = resolve_subscriber(session, command)
    feed_ids = resolve_feed_ids(
        session, command.feed_ids, environment_id=command.environment_id
    )
    affected = MessageRepository(session).mark_all(
        environment_id=command.environment_id,
        subscriber_id=subscriber.id,
        feed_ids=feed_ids,
        mark_as=command.mark_as.value,
        changed_at=now_in_app_timezone(),
    )
    logger.info(
        "Marked %s messages as %s for subscriber %s",
        affected,
        command.mark_as.value,
        command.subscriber_id,
    )
    if affected:
        publish_counts(session, subscriber)
    return affected
