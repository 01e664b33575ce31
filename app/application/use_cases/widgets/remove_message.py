"""Use case for removing a message from the subscriber's feed."""

from sqlalchemy.orm import Session

from app.domain.entities import Message
from app.infrastructure.repositories import MessageRepository

from ._shared import publish_counts, resolve_subscriber
from .commands import RemoveMessageCommand
from .errors import WidgetNotFoundError


def remove_message(session: Session, command: RemoveMessageCommand) -> Message:
    """Soft delete the message and return the removed record."""

    subscriber = resolve_subscriber(session, command)
    removed = MessageRepository(session).soft_delete(
        command.message_id,
        environment_id=command.environment_id,
        subscriber_id=subscriber.id,
    )
    if removed is None:
        raise WidgetNotFoundError(f"Message with id {command.message_id} not found")
    publish_counts(session, subscriber)
    return removed
