"""
User repository implementation using SQLAlchemy.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from timebill.domain.models.base import DuplicateEntityError
from timebill.domain.models.user import User, UserRole
from timebill.domain.repositories.user_repository import UserRepository as UserRepositoryInterface
from timebill.infrastructure.db.models import UserModel
from timebill.infrastructure.mappers.user_mapper import UserMapper
from timebill.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyUserRepository(SQLAlchemyRepository[User], UserRepositoryInterface):
    """SQLAlchemy implementation of user repository."""

    model = UserModel
    mapper_class = UserMapper

    def save(self, user: User) -> User:
        existing = self.get_by_email(user.email)
        if existing is not None and existing.id != user.id:
            raise DuplicateEntityError("User", "email", user.email)
        try:
            return super().save(user)
        except IntegrityError as exc:
            self.session.rollback()
            raise DuplicateEntityError("User", "email", user.email) from exc

    def get_by_email(self, email: str) -> Optional[User]:
        model = self.session.scalars(
            select(UserModel).where(UserModel.email == email.strip().lower())
        ).first()
        return self.mapper.model_to_domain(model) if model else None

    def list_all(self, role: Optional[UserRole] = None) -> List[User]:
        query = select(UserModel).order_by(UserModel.name)
        if role is not None:
            query = query.where(UserModel.role == UserRole(role).value)
        return self._to_domain(self.session.scalars(query))
