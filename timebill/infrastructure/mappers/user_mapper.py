"""
User mapper for converting between domain entities and database models.
"""

from timebill.domain.models.user import User
from timebill.infrastructure.db.models import UserModel
from timebill.infrastructure.mappers.base_mapper import ColumnMapper


class UserMapper(ColumnMapper[User, UserModel]):
    """Maps between User domain entity and UserModel database model."""

    entity_class = User
    model_class = UserModel
    fields = ("email", "name", "role", "password_hash", "active")
