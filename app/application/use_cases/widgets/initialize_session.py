"""Use case for starting a widget session for a subscriber."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from sqlalchemy.orm import Session

from app.domain.entities import Subscriber
from app.infrastructure.repositories import EnvironmentRepository, SubscriberRepository
from app.infrastructure.security import create_subscriber_token, verify_subscriber_hmac

from .commands import InitializeSessionCommand
from .errors import WidgetRequestError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WidgetSession:
    token: str
    profile: Subscriber


def initialize_session(session: Session, command: InitializeSessionCommand) -> WidgetSession:
    """Create or refresh the subscriber and issue a widget token."""

    environment = EnvironmentRepository(session).get_by_identifier(
        command.application_identifier
    )
    if environment is None:
        logger.warning(
            "Widget session rejected: unknown application identifier %s",
            command.application_identifier,
        )
        raise WidgetRequestError("Please provide a valid app identifier")

    if environment.hmac_enabled and not verify_subscriber_hmac(
        environment.api_key, command.subscriber_id, command.hmac_hash
    ):
        logger.warning(
            "Widget session rejected: invalid HMAC for subscriber %s in environment %s",
            command.subscriber_id,
            environment.id,
        )
        raise WidgetRequestError("Please provide a valid HMAC hash")

    repository = SubscriberRepository(session)
    subscriber = repository.get_by_subscriber_id(
        environment_id=environment.id, subscriber_id=command.subscriber_id
    )
    if subscriber is None:
        subscriber = repository.create(
            Subscriber(
                id=None,
                organization_id=environment.organization_id,
                environment_id=environment.id,
                subscriber_id=command.subscriber_id,
                email=command.email,
                first_name=command.first_name,
                last_name=command.last_name,
                phone=command.phone,
            )
        )
    elif _profile_changed(subscriber, command):
        subscriber = repository.update(
            replace(
                subscriber,
                email=command.email or subscriber.email,
                first_name=command.first_name or subscriber.first_name,
                last_name=command.last_name or subscriber.last_name,
                phone=command.phone or subscriber.phone,
            )
        )

    token = create_subscriber_token(
        subscriber_internal_id=subscriber.id,
        subscriber_id=subscriber.subscriber_id,
        organization_id=subscriber.organization_id,
        environment_id=subscriber.environment_id,
    )
    logger.info(
        "Widget session initialized for subscriber %s in environment %s",
        subscriber.subscriber_id,
        environment.id,
    )
    return WidgetSession(token=token, profile=subscriber)


def _profile_changed(subscriber: Subscriber, command: InitializeSessionCommand) -> bool:
    pairs = (
        (command.email, subscriber.email),
        (command.first_name, subscriber.first_name),
        (command.last_name, subscriber.last_name),
        (command.phone, subscriber.phone),
    )
    return any(new is not None and new != current for new, current in pairs)
