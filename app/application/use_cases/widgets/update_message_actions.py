"""Use case for recording the outcome of a message call-to-action."""

from __future__ import annotations

from copy import deepcopy

from sqlalchemy.orm import Session

from app.domain.entities import Message
from app.infrastructure.repositories import MessageRepository

from ._shared import resolve_subscriber
from .commands import UpdateMessageActionsCommand
from .errors import WidgetNotFoundError


def update_message_actions(session: Session, command: UpdateMessageActionsCommand) -> Message:
    """Store the action status and result on the message ``cta``."""

    subscriber = resolve_subscriber(session, command)
    repository = MessageRepository(session)
    scope = {"environment_id": command.environment_id, "subscriber_id": subscriber.id}

    message = repository.get_for_subscriber(command.message_id, **scope)
    if message is None:
        raise WidgetNotFoundError(f"Message with id {command.message_id} not found")

    cta = deepcopy(message.cta) if message.cta else {}
    action = dict(cta.get("action") or {})
    action["status"] = command.status.value
    action["result"] = {"payload": command.payload, "type": command.type.value}
    cta["action"] = action

    updated = repository.update_cta(command.message_id, cta, **scope)
    if updated is None:  # pragma: no cover - removed concurrently
        raise WidgetNotFoundError(f"Message with id {command.message_id} not found")
    return updated
