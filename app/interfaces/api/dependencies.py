"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.domain.entities import SubscriberSession
from app.infrastructure.database import get_db
from app.infrastructure.repositories import SubscriberRepository
from app.infrastructure.security import decode_subscriber_token

subscriber_bearer = HTTPBearer(auto_error=False)


def _unauthorized(detail: str = "Invalid credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_subscriber_session(token: str, db: Session) -> SubscriberSession:
    """Resolve the subscriber session for the provided widget token."""

    try:
        payload = decode_subscriber_token(token)
    except ValueError as exc:
        raise _unauthorized() from exc

    subscriber_internal_id = payload.get("sub")
    if not isinstance(subscriber_internal_id, str) or not subscriber_internal_id:
        raise _unauthorized()

    subscriber = SubscriberRepository(db).get(subscriber_internal_id)
    if subscriber is None:
        raise _unauthorized("Subscriber not found")

    if subscriber.environment_id != payload.get("environmentId"):
        raise _unauthorized()

    return SubscriberSession(
        id=subscriber.id,
        organization_id=subscriber.organization_id,
        environment_id=subscriber.environment_id,
        subscriber_id=subscriber.subscriber_id,
    )


def get_subscriber_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(subscriber_bearer),
    db: Session = Depends(get_db),
) -> SubscriberSession:
    """Return the authenticated widget subscriber."""

    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _unauthorized("Not authenticated")
    return resolve_subscriber_session(credentials.credentials, db)
