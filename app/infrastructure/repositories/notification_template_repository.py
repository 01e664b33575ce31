"""Persistence layer for workflows and subscriber preferences."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from sqlalchemy.orm import Session

from app.domain.entities import ChannelType, NotificationTemplate, SubscriberPreference
from app.infrastructure.models import NotificationTemplateModel, SubscriberPreferenceModel


def _channel_map(raw: Mapping[str, bool] | None) -> dict[ChannelType, bool]:
    channels: dict[ChannelType, bool] = {}
    for key, value in (raw or {}).items():
        try:
            channels[ChannelType(key)] = bool(value)
        except ValueError:
            continue
    return channels


def _serialize_channel_map(channels: Mapping[ChannelType, bool]) -> dict[str, bool]:
    return {ChannelType(key).value: bool(value) for key, value in channels.items()}


class NotificationTemplateRepository:
    """Provide read and create operations for :class:`NotificationTemplate`."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_active(self, *, environment_id: str) -> Sequence[NotificationTemplate]:
        query = (
            self.session.query(NotificationTemplateModel)
            .filter(NotificationTemplateModel.environment_id == environment_id)
            .filter(NotificationTemplateModel.active.is_(True))
            .order_by(NotificationTemplateModel.name.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, template_id: str, *, environment_id: str) -> NotificationTemplate | None:
        model = (
            self.session.query(NotificationTemplateModel)
            .filter(NotificationTemplateModel.id == template_id)
            .filter(NotificationTemplateModel.environment_id == environment_id)
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, template: NotificationTemplate) -> NotificationTemplate:
        model = NotificationTemplateModel(
            organization_id=template.organization_id,
            environment_id=template.environment_id,
            name=template.name,
            active=template.active,
            critical=template.critical,
            channels=[ChannelType(channel).value for channel in template.channels],
            preference_settings=_serialize_channel_map(template.preference_settings),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: NotificationTemplateModel) -> NotificationTemplate:
        channels: list[ChannelType] = []
        for raw in model.channels or []:
            try:
                channel = ChannelType(raw)
            except ValueError:
                continue
            if channel not in channels:
                channels.append(channel)
        return NotificationTemplate(
            id=model.id,
            organization_id=model.organization_id,
            environment_id=model.environment_id,
            name=model.name,
            active=bool(model.active),
            critical=bool(model.critical),
            channels=channels,
            preference_settings=_channel_map(model.preference_settings),
        )


class SubscriberPreferenceRepository:
    """Store the per-template choices of a subscriber."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_subscriber(self, subscriber_id: str) -> Sequence[SubscriberPreference]:
        query = self.session.query(SubscriberPreferenceModel).filter(
            SubscriberPreferenceModel.subscriber_id == subscriber_id
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, *, subscriber_id: str, template_id: str) -> SubscriberPreference | None:
        model = self._get_model(subscriber_id=subscriber_id, template_id=template_id)
        return self._to_entity(model) if model else None

    def upsert(self, preference: SubscriberPreference) -> SubscriberPreference:
        model = self._get_model(
            subscriber_id=preference.subscriber_id, template_id=preference.template_id
        )
        if model is None:
            model = SubscriberPreferenceModel(
                organization_id=preference.organization_id,
                environment_id=preference.environment_id,
                subscriber_id=preference.subscriber_id,
                template_id=preference.template_id,
            )
        model.enabled = preference.enabled
        model.channels = _serialize_channel_map(preference.channels)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def _get_model(
        self, *, subscriber_id: str, template_id: str
    ) -> SubscriberPreferenceModel | None:
        return (
            self.session.query(SubscriberPreferenceModel)
            .filter(SubscriberPreferenceModel.subscriber_id == subscriber_id)
            .filter(SubscriberPreferenceModel.template_id == template_id)
            .first()
        )

    @staticmethod
    def _to_entity(model: SubscriberPreferenceModel) -> SubscriberPreference:
        return SubscriberPreference(
            id=model.id,
            organization_id=model.organization_id,
            environment_id=model.environment_id,
            subscriber_id=model.subscriber_id,
            template_id=model.template_id,
            enabled=bool(model.enabled),
            channels=_channel_map(model.channels),
        )


__all__ = ["NotificationTemplateRepository", "SubscriberPreferenceRepository"]
