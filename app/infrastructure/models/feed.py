"""SQLAlchemy model for feeds."""

from sqlalchemy import Column, ForeignKey, String

from app.infrastructure.database import Base
from app.utils import new_id


class FeedModel(Base):
    """Database representation of a message feed."""

    __tablename__ = "feed"

    id = Column(String(32), primary_key=True, default=new_id)
    organization_id = Column(String(32), ForeignKey("organization.id"), nullable=False)
    environment_id = Column(
        String(32), ForeignKey("environment.id"), nullable=False, index=True
    )
    name = Column(String(120), nullable=False)
    identifier = Column(String(120), nullable=False, index=True)


__all__ = ["FeedModel"]
