"""Persistence layer for organizations and environments."""

from __future__ import annotations

from dataclasses import asdict

from sqlalchemy.orm import Session

from app.domain.entities import Branding, Environment, Organization
from app.infrastructure.models import EnvironmentModel, OrganizationModel


class OrganizationRepository:
    """Provide read and create operations for organizations."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, organization_id: str) -> Organization | None:
        model = self.session.get(OrganizationModel, organization_id)
        return self._to_entity(model) if model else None

    def create(self, organization: Organization) -> Organization:
        model = OrganizationModel(
            name=organization.name,
            branding={
                key: value
                for key, value in asdict(organization.branding).items()
                if value is not None
            },
        )
        if organization.id:
            model.id = organization.id
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: OrganizationModel) -> Organization:
        branding = model.branding or {}
        return Organization(
            id=model.id,
            name=model.name,
            branding=Branding(
                logo=branding.get("logo"),
                color=branding.get("color"),
                font_color=branding.get("font_color"),
                content_background=branding.get("content_background"),
                font_family=branding.get("font_family"),
                direction=branding.get("direction"),
            ),
            created_at=model.created_at,
        )


class EnvironmentRepository:
    """Look up environments by their public application identifier."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_identifier(self, identifier: str) -> Environment | None:
        model = (
            self.session.query(EnvironmentModel)
            .filter(EnvironmentModel.identifier == identifier)
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, environment: Environment) -> Environment:
        model = EnvironmentModel(
            organization_id=environment.organization_id,
            name=environment.name,
            identifier=environment.identifier,
            api_key=environment.api_key,
            hmac_enabled=environment.hmac_enabled,
        )
        if environment.id:
            model.id = environment.id
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: EnvironmentModel) -> Environment:
        return Environment(
            id=model.id,
            organization_id=model.organization_id,
            name=model.name,
            identifier=model.identifier,
            api_key=model.api_key,
            hmac_enabled=bool(model.hmac_enabled),
        )


__all__ = ["EnvironmentRepository", "OrganizationRepository"]
