"""Endpoints relacionados con autenticación de usuarios del panel."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.application.use_cases.users import (
    AuthenticationStatus,
    authenticate_user,
    record_login,
)
from app.domain.entities import AUTH_ERROR_MESSAGES
from app.infrastructure.database import get_db
from app.infrastructure.security import create_access_token
from app.interfaces.api.schemas import AuthErrorDetail, LoginRequest, LoginResponse

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> LoginResponse:
    """Authenticate a dashboard user by email and return a JWT.

    Validation failures answer 400 with a stable ``code`` next to the message.
    """

    user, auth_status = authenticate_user(db, payload.email, payload.password)

    if auth_status is not AuthenticationStatus.SUCCESS or user is None:
        code = auth_status.error_code
        logger.info("Login rejected: %s", code.value)
        detail = AuthErrorDetail(code=code, message=AUTH_ERROR_MESSAGES[code])
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail.model_dump(mode="json"),
        )

    token = create_access_token(
        data={"sub": user.id, "email": user.email, "organizationId": user.organization_id}
    )
    record_login(db, user.id)
    return LoginResponse(token=token)
