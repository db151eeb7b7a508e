"""
User domain model.
Employees log time; administrators review, bill and report.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from timebill.domain.models.base import BaseEntity


class UserRole(str, Enum):
    """User roles."""
    EMPLOYEE = "employee"
    ADMINISTRATOR = "administrator"


@dataclass
class User(BaseEntity):
    """User entity. The role is fixed at provisioning time."""

    email: str
    name: str
    role: UserRole = UserRole.EMPLOYEE
    password_hash: str = ""
    active: bool = True

    def __post_init__(self):
        self.email = self.email.strip().lower()
        if not isinstance(self.role, UserRole):
            self.role = UserRole(self.role)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMINISTRATOR

    def to_dict(self) -> Dict[str, Any]:
        """Dictionary representation without the password hash."""
        data = super().to_dict()
        data.pop("password_hash", None)
        return data
