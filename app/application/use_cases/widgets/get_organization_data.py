"""Use case for reading the organization shown in the widget header."""

from sqlalchemy.orm import Session

from app.domain.entities import Organization
from app.infrastructure.repositories import OrganizationRepository

from .commands import GetOrganizationDataCommand
from .errors import WidgetNotFoundError


def get_organization_data(session: Session, command: GetOrganizationDataCommand) -> Organization:
    organization = OrganizationRepository(session).get(command.organization_id)
    if organization is None:
        raise WidgetNotFoundError("Organization not found")
    return organization
