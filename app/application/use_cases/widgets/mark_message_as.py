"""Use case for changing the seen/read status of specific messages."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Message
from app.infrastructure.repositories import MessageRepository
from app.utils import now_in_app_timezone

from ._shared import publish_counts, resolve_subscriber
from .commands import MarkMessageAsCommand


def mark_message_as(session: Session, command: MarkMessageAsCommand) -> Sequence[Message]:
    """Apply ``command.mark`` and return the updated messages in request order.

    Identifiers that do not belong to the subscriber are ignored, so the result
    can be shorter than ``command.message_ids``.
    """

    subscriber = resolve_subscriber(session, command)
    repository = MessageRepository(session)
    scope = {"environment_id": command.environment_id, "subscriber_id": subscriber.id}

    affected = repository.change_status(
        command.message_ids,
        seen=command.mark.seen,
        read=command.mark.read,
        changed_at=now_in_app_timezone(),
        **scope,
    )
    if affected:
        publish_counts(session, subscriber)

    return repository.list_by_ids(command.message_ids, **scope)
