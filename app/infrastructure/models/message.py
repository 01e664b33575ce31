"""SQLAlchemy model for in-app messages."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, JSON, String, Text
from sqlalchemy.sql import expression

from app.infrastructure.database import Base
from app.utils import new_id, now_in_app_naive_datetime


class MessageModel(Base):
    """Database representation for subscriber messages."""

    __tablename__ = "message"

    id = Column(String(32), primary_key=True, default=new_id)
    organization_id = Column(String(32), ForeignKey("organization.id"), nullable=False)
    environment_id = Column(
        String(32), ForeignKey("environment.id"), nullable=False, index=True
    )
    subscriber_id = Column(
        String(32), ForeignKey("subscriber.id"), nullable=False, index=True
    )
    template_id = Column(String(32), ForeignKey("notification_template.id"), nullable=True)
    feed_id = Column(String(32), ForeignKey("feed.id"), nullable=True, index=True)
    channel = Column(String(20), nullable=False, default="in_app")
    content = Column(Text, nullable=False)
    payload = Column(JSON, nullable=False, default=dict)
    cta = Column(JSON, nullable=False, default=dict)
    seen = Column(Boolean, nullable=False, default=False, server_default=expression.false())
    read = Column(Boolean, nullable=False, default=False, server_default=expression.false())
    last_seen_date = Column(DateTime(), nullable=True)
    last_read_date = Column(DateTime(), nullable=True)
    deleted = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["MessageModel"]
