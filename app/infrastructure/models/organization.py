"""SQLAlchemy models for organizations and their environments."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, JSON, String
from sqlalchemy.sql import expression

from app.infrastructure.database import Base
from app.utils import new_id, now_in_app_naive_datetime


class OrganizationModel(Base):
    """Database representation of a customer organization."""

    __tablename__ = "organization"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(120), nullable=False)
    branding = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


class EnvironmentModel(Base):
    """Database representation of an organization environment."""

    __tablename__ = "environment"

    id = Column(String(32), primary_key=True, default=new_id)
    organization_id = Column(
        String(32), ForeignKey("organization.id"), nullable=False, index=True
    )
    name = Column(String(60), nullable=False)
    identifier = Column(String(64), nullable=False, unique=True, index=True)
    api_key = Column(String(128), nullable=False)
    hmac_enabled = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )


__all__ = ["EnvironmentModel", "OrganizationModel"]
