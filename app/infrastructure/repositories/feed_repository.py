"""Persistence helpers for feeds."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Feed
from app.infrastructure.models import FeedModel


class FeedRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list_by_identifiers(
        self, identifiers: Sequence[str], *, environment_id: str
    ) -> Sequence[Feed]:
        if not identifiers:
            return []
        query = (
            self.session.query(FeedModel)
            .filter(FeedModel.environment_id == environment_id)
            .filter(FeedModel.identifier.in_(list(identifiers)))
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, feed: Feed) -> Feed:
        model = FeedModel(
            organization_id=feed.organization_id,
            environment_id=feed.environment_id,
            name=feed.name,
            identifier=feed.identifier,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: FeedModel) -> Feed:
        return Feed(
            id=model.id,
            organization_id=model.organization_id,
            environment_id=model.environment_id,
            name=model.name,
            identifier=model.identifier,
        )


__all__ = ["FeedRepository"]
