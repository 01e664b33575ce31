"""Use cases for reading and updating subscriber channel preferences."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.domain.entities import (
    ChannelType,
    NotificationTemplate,
    SubscriberPreference,
)
from app.infrastructure.repositories import (
    NotificationTemplateRepository,
    SubscriberPreferenceRepository,
)

from ._shared import resolve_subscriber
from .commands import GetSubscriberPreferenceCommand, UpdateSubscriberPreferenceCommand
from .errors import WidgetNotFoundError, WidgetRequestError


@dataclass(frozen=True)
class TemplatePreference:
    """Effective preference of a subscriber for one workflow."""

    template: NotificationTemplate
    enabled: bool
    channels: dict[ChannelType, bool]


def build_template_preference(
    template: NotificationTemplate, preference: SubscriberPreference | None
) -> TemplatePreference:
    """Merge the subscriber's overrides over the workflow defaults.

    Only the channels the workflow actually uses are reported; a channel with
    no default and no override is enabled.
    """

    overrides = preference.channels if preference else {}
    channels = {
        channel: overrides.get(channel, template.preference_settings.get(channel, True))
        for channel in template.channels
    }
    return TemplatePreference(
        template=template,
        enabled=preference.enabled if preference else True,
        channels=channels,
    )


def get_subscriber_preference(
    session: Session, command: GetSubscriberPreferenceCommand
) -> Sequence[TemplatePreference]:
    """Return the preference of every active, non-critical workflow."""

    subscriber = resolve_subscriber(session, command)
    templates = NotificationTemplateRepository(session).list_active(
        environment_id=command.environment_id
    )
    stored = {
        preference.template_id: preference
        for preference in SubscriberPreferenceRepository(session).list_for_subscriber(
            subscriber.id
        )
    }
    return [
        build_template_preference(template, stored.get(template.id))
        for template in templates
        if not template.critical
    ]


def update_subscriber_preference(
    session: Session, command: UpdateSubscriberPreferenceCommand
) -> TemplatePreference:
    """Toggle the workflow and/or one of its channels for the subscriber."""

    subscriber = resolve_subscriber(session, command)
    template = NotificationTemplateRepository(session).get(
        command.template_id, environment_id=command.environment_id
    )
    if template is None:
        raise WidgetNotFoundError(f"Template with id {command.template_id} not found")
    if template.critical:
        raise WidgetRequestError("Critical workflow preferences can not be updated")

    repository = SubscriberPreferenceRepository(session)
    current = repository.get(subscriber_id=subscriber.id, template_id=template.id)
    channels = dict(current.channels) if current else {}
    enabled = current.enabled if current else True

    if command.channel is not None:
        channels[command.channel.type] = command.channel.enabled
    if command.enabled is not None:
        enabled = command.enabled

    saved = repository.upsert(
        SubscriberPreference(
            id=current.id if current else None,
            organization_id=command.organization_id,
            environment_id=command.environment_id,
            subscriber_id=subscriber.id,
            template_id=template.id,
            enabled=enabled,
            channels=channels,
        )
    )
    return build_template_preference(template, saved)
