"""
User repository implementation using SQLAlchemy.
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.domain.models.base import DuplicateEntityError, EntityNotFoundError
from app.domain.models.user import User, UserSettings
from app.domain.repositories.user_repository import UserRepositoryInterface
from app.infrastructure.db.models import UserModel, UserSettingsModel
from app.infrastructure.mappers.user_mapper import UserMapper


class SQLAlchemyUserRepository(UserRepositoryInterface):
    """SQLAlchemy implementation of user repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = UserMapper()

    def save(self, user: User) -> User:
        """Save a user; new users are inserted with their settings."""
        model = self.session.get(UserModel, user.id) if user.id else None

        if model is None:
            model = self.mapper.domain_to_model(user)
            self.session.add(model)
        else:
            self.mapper.update_model(model, user)

        try:
            self.session.flush()
        except IntegrityError:
            self.session.rollback()
            raise DuplicateEntityError("User", "email", user.email)
        return user

    def get_by_id(self, user_id: str) -> Optional[User]:
        model = self.session.execute(
            select(UserModel)
            .options(joinedload(UserModel.settings))
            .where(UserModel.id == user_id)
        ).scalar_one_or_none()
        return self.mapper.model_to_domain(model) if model else None

    def get_by_email(self, email: str) -> Optional[User]:
        model = self.session.execute(
            select(UserModel)
            .options(joinedload(UserModel.settings))
            .where(UserModel.email == email.lower())
        ).scalar_one_or_none()
        return self.mapper.model_to_domain(model) if model else None

    def count_active(self) -> int:
        return self.session.execute(
            select(func.count(UserModel.id)).where(UserModel.is_active.is_(True))
        ).scalar_one()

    def get_settings(self, user_id: str, for_update: bool = False) -> Optional[UserSettings]:
        query = select(UserSettingsModel).where(UserSettingsModel.user_id == user_id)
        if for_update:
            query = query.with_for_update()

        model = self.session.execute(query).scalar_one_or_none()
        return self.mapper.settings_to_domain(model) if model else None

    def save_settings(self, settings: UserSettings) -> UserSettings:
        model = self.session.execute(
            select(UserSettingsModel).where(UserSettingsModel.user_id == settings.user_id)
        ).scalar_one_or_none()
        if model is None:
            raise EntityNotFoundError("UserSettings", settings.user_id)

        self.mapper.update_settings_model(model, settings)
        self.session.flush()
        return settings
