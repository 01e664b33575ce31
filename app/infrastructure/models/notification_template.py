"""SQLAlchemy models for workflows and subscriber preferences."""

from sqlalchemy import Boolean, Column, ForeignKey, JSON, String, UniqueConstraint
from sqlalchemy.sql import expression

from app.infrastructure.database import Base
from app.utils import new_id


class NotificationTemplateModel(Base):
    """Database representation of a notification workflow."""

    __tablename__ = "notification_template"

    id = Column(String(32), primary_key=True, default=new_id)
    organization_id = Column(String(32), ForeignKey("organization.id"), nullable=False)
    environment_id = Column(
        String(32), ForeignKey("environment.id"), nullable=False, index=True
    )
    name = Column(String(120), nullable=False)
    active = Column(Boolean, nullable=False, default=True, server_default=expression.true())
    critical = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    channels = Column(JSON, nullable=False, default=list)
    preference_settings = Column(JSON, nullable=False, default=dict)


class SubscriberPreferenceModel(Base):
    """Channel choices a subscriber made for one workflow."""

    __tablename__ = "subscriber_preference"
    __table_args__ = (
        UniqueConstraint("subscriber_id", "template_id", name="uq_preference_template"),
    )

    id = Column(String(32), primary_key=True, default=new_id)
    organization_id = Column(String(32), ForeignKey("organization.id"), nullable=False)
    environment_id = Column(String(32), ForeignKey("environment.id"), nullable=False)
    subscriber_id = Column(
        String(32), ForeignKey("subscriber.id"), nullable=False, index=True
    )
    template_id = Column(
        String(32), ForeignKey("notification_template.id"), nullable=False
    )
    enabled = Column(Boolean, nullable=False, default=True, server_default=expression.true())
    channels = Column(JSON, nullable=False, default=dict)


__all__ = ["NotificationTemplateModel", "SubscriberPreferenceModel"]
