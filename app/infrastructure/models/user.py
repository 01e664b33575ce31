"""SQLAlchemy model for the user table."""

from sqlalchemy import Column, DateTime, ForeignKey, String, func

from app.infrastructure.database import Base
from app.utils import new_id


class UserModel(Base):
    """Database representation of a dashboard user."""

    __tablename__ = "user"

    id = Column(String(32), primary_key=True, default=new_id)
    organization_id = Column(String(32), ForeignKey("organization.id"), nullable=True)
    email = Column(String(120), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    first_name = Column(String(60), nullable=True)
    last_name = Column(String(60), nullable=True)
    last_login = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
