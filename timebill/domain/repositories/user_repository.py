"""User repository interface.
Defines the contract for user persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from timebill.domain.models.user import User, UserRole


class UserRepository(ABC):
    """Repository interface for User entity."""

    @abstractmethod
    def save(self, user: User) -> User:
        """
        Insert or update a user.
        Returns the stored user.
        """
        pass

    @abstractmethod
    def get_by_id(self, user_id: str) -> Optional[User]:
        pass

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        """
        Find a user by email, case-insensitively.
        Returns None if not found.
        """
        pass

    @abstractmethod
    def list_all(self, role: Optional[UserRole] = None) -> List[User]:
        """
        List users, optionally restricted to one role.
        """
        pass
