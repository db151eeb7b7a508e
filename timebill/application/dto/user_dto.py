"""
User and authentication DTOs.
"""

from typing import Optional

from pydantic import EmailStr, Field

from timebill.application.dto.base_dto import BaseDTO, RequestDTO, ResponseDTO
from timebill.domain.models.user import User, UserRole


class CreateUserRequestDTO(RequestDTO):
    """DTO for provisioning a user account."""

    email: EmailStr = Field(description="Login email")
    name: str = Field(min_length=1, max_length=255, description="Display name")
    role: UserRole = Field(default=UserRole.EMPLOYEE, description="Account role")
    password: str = Field(min_length=8, max_length=128, description="Initial password")


class LoginRequestDTO(RequestDTO):
    email: str = Field(min_length=1, description="Login email")
    password: str = Field(min_length=1, description="Password")


class UserResponseDTO(ResponseDTO):
    """DTO for user responses. Never carries the password hash."""

    email: str
    name: str
    role: UserRole
    active: bool

    @classmethod
    def from_domain(cls, user: User) -> "UserResponseDTO":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            role=user.role,
            active=user.active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class TokenResponseDTO(BaseDTO):
    """DTO for a successful login."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(description="Token lifetime in seconds")
    user: Optional[UserResponseDTO] = None
