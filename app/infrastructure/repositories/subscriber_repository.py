"""Persistence layer for subscriber data."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import Subscriber
from app.infrastructure.models import SubscriberModel
from app.utils import ensure_app_timezone


class SubscriberRepository:
    """Provide CRUD operations for subscriber entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, subscriber_internal_id: str) -> Subscriber | None:
        model = self.session.get(SubscriberModel, subscriber_internal_id)
        return self._to_entity(model) if model else None

    def get_by_subscriber_id(
        self, *, environment_id: str, subscriber_id: str
    ) -> Subscriber | None:
        model = self._get_model(environment_id=environment_id, subscriber_id=subscriber_id)
        return self._to_entity(model) if model else None

    def create(self, subscriber: Subscriber) -> Subscriber:
        model = SubscriberModel(
            organization_id=subscriber.organization_id,
            environment_id=subscriber.environment_id,
            subscriber_id=subscriber.subscriber_id,
        )
        self._apply_profile(model, subscriber)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, subscriber: Subscriber) -> Subscriber:
        model = self.session.get(SubscriberModel, subscriber.id)
        if model is None:
            msg = f"Subscriber with id {subscriber.id} not found"
            raise ValueError(msg)
        self._apply_profile(model, subscriber)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def _get_model(self, *, environment_id: str, subscriber_id: str) -> SubscriberModel | None:
        return (
            self.session.query(SubscriberModel)
            .filter(SubscriberModel.environment_id == environment_id)
            .filter(SubscriberModel.subscriber_id == subscriber_id)
            .first()
        )

    @staticmethod
    def _apply_profile(model: SubscriberModel, subscriber: Subscriber) -> None:
        model.email = subscriber.email
        model.first_name = subscriber.first_name
        model.last_name = subscriber.last_name
        model.phone = subscriber.phone
        model.avatar = subscriber.avatar

    @staticmethod
    def _to_entity(model: SubscriberModel) -> Subscriber:
        return Subscriber(
            id=model.id,
            organization_id=model.organization_id,
            environment_id=model.environment_id,
            subscriber_id=model.subscriber_id,
            email=model.email,
            first_name=model.first_name,
            last_name=model.last_name,
            phone=model.phone,
            avatar=model.avatar,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["SubscriberRepository"]
