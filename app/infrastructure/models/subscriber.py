"""SQLAlchemy model for subscribers."""

from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint

from app.infrastructure.database import Base
from app.utils import new_id, now_in_app_naive_datetime


class SubscriberModel(Base):
    """Database representation of a notification subscriber."""

    __tablename__ = "subscriber"
    __table_args__ = (
        UniqueConstraint("environment_id", "subscriber_id", name="uq_subscriber_environment"),
    )

    id = Column(String(32), primary_key=True, default=new_id)
    organization_id = Column(String(32), ForeignKey("organization.id"), nullable=False)
    environment_id = Column(
        String(32), ForeignKey("environment.id"), nullable=False, index=True
    )
    subscriber_id = Column(String(120), nullable=False)
    email = Column(String(120), nullable=True)
    first_name = Column(String(60), nullable=True)
    last_name = Column(String(60), nullable=True)
    phone = Column(String(30), nullable=True)
    avatar = Column(String(255), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime(), nullable=True, onupdate=now_in_app_naive_datetime)


__all__ = ["SubscriberModel"]
