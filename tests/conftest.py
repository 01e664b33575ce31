"""Shared fixtures: a sqlite database and one seeded tenant."""

from __future__ import annotations

import os
import sys
import tempfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "widget_inbox_api_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["WIDGET_PAGE_SIZE"] = "2"

from app.config import get_settings  # noqa: E402

get_settings.cache_clear()

from app.domain.entities import (  # noqa: E402
    Branding,
    ChannelType,
    Environment,
    Feed,
    Message,
    NotificationTemplate,
    Organization,
    Subscriber,
    SubscriberSession,
)
from app.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from app.infrastructure.repositories import (  # noqa: E402
    EnvironmentRepository,
    FeedRepository,
    MessageRepository,
    NotificationTemplateRepository,
    OrganizationRepository,
    SubscriberRepository,
)
from app.infrastructure.security import create_subscriber_token  # noqa: E402

APP_IDENTIFIER = "app-identifier"
API_KEY = "environment-api-key"


@dataclass
class Tenant:
    organization: Organization
    environment: Environment
    subscriber: Subscriber
    feeds: dict[str, Feed]
    templates: dict[str, NotificationTemplate]

    @property
    def session(self) -> SubscriberSession:
        return SubscriberSession(
            id=self.subscriber.id,
            organization_id=self.organization.id,
            environment_id=self.environment.id,
            subscriber_id=self.subscriber.subscriber_id,
        )

    def token_for(self, subscriber: Subscriber | None = None) -> str:
        target = subscriber or self.subscriber
        return create_subscriber_token(
            subscriber_internal_id=target.id,
            subscriber_id=target.subscriber_id,
            organization_id=target.organization_id,
            environment_id=target.environment_id,
        )


@pytest.fixture()
def db_session():
    """Provide a session bound to a freshly created schema."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def tenant(db_session) -> Tenant:
    """Seed an organization, environment, subscriber, two feeds and workflows."""

    organization = OrganizationRepository(db_session).create(
        Organization(id=None, name="Acme", branding=Branding(color="#ff0000", logo="logo.png"))
    )
    environment = EnvironmentRepository(db_session).create(
        Environment(
            id=None,
            organization_id=organization.id,
            name="Development",
            identifier=APP_IDENTIFIER,
            api_key=API_KEY,
        )
    )
    subscriber = SubscriberRepository(db_session).create(
        Subscriber(
            id=None,
            organization_id=organization.id,
            environment_id=environment.id,
            subscriber_id="subscriber-1",
            first_name="Ada",
        )
    )
    feed_repository = FeedRepository(db_session)
    feeds = {
        identifier: feed_repository.create(
            Feed(
                id=None,
                organization_id=organization.id,
                environment_id=environment.id,
                name=identifier.title(),
                identifier=identifier,
            )
        )
        for identifier in ("news", "alerts")
    }
    template_repository = NotificationTemplateRepository(db_session)
    templates = {
        "welcome": template_repository.create(
            NotificationTemplate(
                id=None,
                organization_id=organization.id,
                environment_id=environment.id,
                name="Welcome",
                channels=[ChannelType.IN_APP, ChannelType.EMAIL],
                preference_settings={ChannelType.EMAIL: False},
            )
        ),
        "security": template_repository.create(
            NotificationTemplate(
                id=None,
                organization_id=organization.id,
                environment_id=environment.id,
                name="Security alert",
                critical=True,
                channels=[ChannelType.EMAIL],
            )
        ),
    }
    return Tenant(
        organization=organization,
        environment=environment,
        subscriber=subscriber,
        feeds=feeds,
        templates=templates,
    )


@pytest.fixture()
def make_message(db_session, tenant):
    """Return a factory that stores an in-app message for a subscriber."""

    repository = MessageRepository(db_session)

    def _make(
        content: str = "Hello",
        *,
        feed: str | None = None,
        subscriber: Subscriber | None = None,
        seen: bool = False,
        read: bool = False,
        cta: dict | None = None,
        created_at: datetime | None = None,
    ) -> Message:
        target = subscriber or tenant.subscriber
        return repository.create(
            Message(
                id=None,
                organization_id=target.organization_id,
                environment_id=target.environment_id,
                subscriber_id=target.id,
                content=content,
                feed_id=tenant.feeds[feed].id if feed else None,
                seen=seen,
                read=read,
                cta=cta or {},
                created_at=created_at,
            )
        )

    return _make


@pytest.fixture()
def other_subscriber(db_session, tenant) -> Subscriber:
    return SubscriberRepository(db_session).create(
        Subscriber(
            id=None,
            organization_id=tenant.organization.id,
            environment_id=tenant.environment.id,
            subscriber_id="subscriber-2",
        )
    )
