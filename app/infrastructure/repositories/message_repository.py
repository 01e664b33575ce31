"""Persistence helpers for in-app message entities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from app.domain.entities import CHANNEL_IN_APP, Message
from app.infrastructure.models import MessageModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone


class MessageRepository:
    """Provide CRUD operations for :class:`Message` objects.

    Every query is scoped by environment and internal subscriber id, and only
    covers undeleted in-app messages.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def _subscriber_query(self, *, environment_id: str, subscriber_id: str) -> Query:
        return (
            self.session.query(MessageModel)
            .filter(MessageModel.environment_id == environment_id)
            .filter(MessageModel.subscriber_id == subscriber_id)
            .filter(MessageModel.channel == CHANNEL_IN_APP)
            .filter(MessageModel.deleted.is_(False))
        )

    def _filtered_query(
        self,
        *,
        environment_id: str,
        subscriber_id: str,
        feed_ids: Sequence[str] | None = None,
        seen: bool | None = None,
        read: bool | None = None,
    ) -> Query:
        query = self._subscriber_query(
            environment_id=environment_id, subscriber_id=subscriber_id
        )
        if feed_ids is not None:
            query = query.filter(MessageModel.feed_id.in_(list(feed_ids)))
        if seen is not None:
            query = query.filter(MessageModel.seen.is_(seen))
        if read is not None:
            query = query.filter(MessageModel.read.is_(read))
        return query

    def list_feed(
        self,
        *,
        environment_id: str,
        subscriber_id: str,
        feed_ids: Sequence[str] | None = None,
        seen: bool | None = None,
        read: bool | None = None,
        skip: int = 0,
        limit: int = 10,
    ) -> Sequence[Message]:
        query = self._filtered_query(
            environment_id=environment_id,
            subscriber_id=subscriber_id,
            feed_ids=feed_ids,
            seen=seen,
            read=read,
        ).order_by(MessageModel.created_at.desc(), MessageModel.id.desc())
        return [self._to_entity(model) for model in query.offset(skip).limit(limit).all()]

    def count(
        self,
        *,
        environment_id: str,
        subscriber_id: str,
        feed_ids: Sequence[str] | None = None,
        seen: bool | None = None,
        read: bool | None = None,
    ) -> int:
        query = self._filtered_query(
            environment_id=environment_id,
            subscriber_id=subscriber_id,
            feed_ids=feed_ids,
            seen=seen,
            read=read,
        )
        return query.with_entities(func.count(MessageModel.id)).scalar() or 0

    def get_for_subscriber(
        self, message_id: str, *, environment_id: str, subscriber_id: str
    ) -> Message | None:
        model = self._get_model(
            message_id, environment_id=environment_id, subscriber_id=subscriber_id
        )
        return self._to_entity(model) if model else None

    def list_by_ids(
        self, message_ids: Sequence[str], *, environment_id: str, subscriber_id: str
    ) -> Sequence[Message]:
        """Return the subscriber's messages for ``message_ids`` in request order."""

        if not message_ids:
            return []
        models = (
            self._subscriber_query(
                environment_id=environment_id, subscriber_id=subscriber_id
            )
            .filter(MessageModel.id.in_(list(message_ids)))
            .all()
        )
        by_id = {model.id: model for model in models}
        ordered: list[Message] = []
        emitted: set[str] = set()
        for message_id in message_ids:
            model = by_id.get(message_id)
            if model is None or message_id in emitted:
                continue
            emitted.add(message_id)
            ordered.append(self._to_entity(model))
        return ordered

    def create(self, message: Message) -> Message:
        model = MessageModel()
        self._apply_entity_to_model(model, message)
        if message.id:
            model.id = message.id
        if message.created_at is not None:
            model.created_at = ensure_app_naive_datetime(message.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def change_status(
        self,
        message_ids: Sequence[str],
        *,
        environment_id: str,
        subscriber_id: str,
        seen: bool | None = None,
        read: bool | None = None,
        changed_at: datetime,
    ) -> int:
        """Apply the ``seen``/``read`` flags to the subscriber's ``message_ids``."""

        values = self._status_values(seen=seen, read=read, changed_at=changed_at)
        if not message_ids or not values:
            return 0
        affected = (
            self._subscriber_query(
                environment_id=environment_id, subscriber_id=subscriber_id
            )
            .filter(MessageModel.id.in_(list(message_ids)))
            .update(values, synchronize_session=False)
        )
        self.session.commit()
        return affected

    def mark_all(
        self,
        *,
        environment_id: str,
        subscriber_id: str,
        feed_ids: Sequence[str] | None,
        mark_as: str,
        changed_at: datetime,
    ) -> int:
        """Flag every message not yet ``mark_as`` (``seen`` or ``read``)."""

        if mark_as == "seen":
            query = self._filtered_query(
                environment_id=environment_id,
                subscriber_id=subscriber_id,
                feed_ids=feed_ids,
                seen=False,
            )
            values = self._status_values(seen=True, read=None, changed_at=changed_at)
        elif mark_as == "read":
            query = self._filtered_query(
                environment_id=environment_id,
                subscriber_id=subscriber_id,
                feed_ids=feed_ids,
                read=False,
            )
            values = self._status_values(seen=None, read=True, changed_at=changed_at)
        else:
            raise ValueError(f"Unsupported mark type '{mark_as}'")

        affected = query.update(values, synchronize_session=False)
        self.session.commit()
        return affected

    def soft_delete(
        self, message_id: str, *, environment_id: str, subscriber_id: str
    ) -> Message | None:
        model = self._get_model(
            message_id, environment_id=environment_id, subscriber_id=subscriber_id
        )
        if model is None:
            return None
        model.deleted = True
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_cta(
        self,
        message_id: str,
        cta: dict[str, Any],
        *,
        environment_id: str,
        subscriber_id: str,
    ) -> Message | None:
        model = self._get_model(
            message_id, environment_id=environment_id, subscriber_id=subscriber_id
        )
        if model is None:
            return None
        # Reassign so the JSON column registers the change.
        model.cta = dict(cta)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def _get_model(
        self, message_id: str, *, environment_id: str, subscriber_id: str
    ) -> MessageModel | None:
        return (
            self._subscriber_query(
                environment_id=environment_id, subscriber_id=subscriber_id
            )
            .filter(MessageModel.id == message_id)
            .first()
        )

    @staticmethod
    def _status_values(
        *, seen: bool | None, read: bool | None, changed_at: datetime
    ) -> dict[Any, Any]:
        stamp = ensure_app_naive_datetime(changed_at)
        values: dict[Any, Any] = {}
        if seen is not None:
            values[MessageModel.seen] = seen
            if seen:
                values[MessageModel.last_seen_date] = stamp
        if read is not None:
            values[MessageModel.read] = read
            if read:
                values[MessageModel.last_read_date] = stamp
        return values

    @staticmethod
    def _apply_entity_to_model(model: MessageModel, message: Message) -> None:
        model.organization_id = message.organization_id
        model.environment_id = message.environment_id
        model.subscriber_id = message.subscriber_id
        model.template_id = message.template_id
        model.feed_id = message.feed_id
        model.channel = message.channel
        model.content = message.content
        model.payload = message.payload or {}
        model.cta = message.cta or {}
        model.seen = message.seen
        model.read = message.read
        model.last_seen_date = ensure_app_naive_datetime(message.last_seen_date)
        model.last_read_date = ensure_app_naive_datetime(message.last_read_date)
        model.deleted = message.deleted

    @staticmethod
    def _to_entity(model: MessageModel) -> Message:
        return Message(
            id=model.id,
            organization_id=model.organization_id,
            environment_id=model.environment_id,
            subscriber_id=model.subscriber_id,
            template_id=model.template_id,
            feed_id=model.feed_id,
            channel=model.channel,
            content=model.content,
            payload=model.payload or {},
            cta=model.cta or {},
            seen=bool(model.seen),
            read=bool(model.read),
            last_seen_date=ensure_app_timezone(model.last_seen_date),
            last_read_date=ensure_app_timezone(model.last_read_date),
            deleted=bool(model.deleted),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["MessageRepository"]
