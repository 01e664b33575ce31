"""Persistence layer for user data."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.models import UserModel
from app.utils import ensure_app_naive_datetime


class UserRepository:
    """Provide lookup and create operations for dashboard users."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: str) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(UserModel.email == email.strip().lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel(
            organization_id=user.organization_id,
            email=user.email.strip().lower(),
            password=user.password,
            first_name=user.first_name,
            last_name=user.last_name,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, user: User) -> User:
        model = self.session.get(UserModel, user.id)
        if not model:
            msg = f"User with id {user.id} not found"
            raise ValueError(msg)
        model.first_name = user.first_name
        model.last_name = user.last_name
        model.password = user.password
        model.last_login = ensure_app_naive_datetime(user.last_login)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            organization_id=model.organization_id,
            email=model.email,
            password=model.password,
            first_name=model.first_name,
            last_name=model.last_name,
            last_login=model.last_login,
            created_at=model.created_at,
        )
