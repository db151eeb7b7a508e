"""
User administration router.
"""

from typing import List, Optional

from fastapi import APIRouter, Query, status

from timebill.application.dto.user_dto import CreateUserRequestDTO, UserResponseDTO
from timebill.application.use_cases.user_use_cases import (
    CreateUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
)
from timebill.domain.models.user import UserRole
from timebill.infrastructure.auth.dependencies import AdminUser
from timebill.infrastructure.web.dependencies import ClockDep, PasswordHasherDep, RepositoriesDep

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserResponseDTO)
def create_user(
    request: CreateUserRequestDTO,
    admin: AdminUser,
    repositories: RepositoriesDep,
    password_hasher: PasswordHasherDep,
    clock: ClockDep
):
    """
    Provision an employee or administrator account.

    - **email**: Login email, unique
    - **name**: Display name
    - **role**: employee or administrator
    - **password**: Initial password
    """
    user = CreateUserUseCase(repositories, password_hasher, clock).execute(admin.id, request)
    return UserResponseDTO.from_domain(user)


@router.get("", response_model=List[UserResponseDTO])
def list_users(
    admin: AdminUser,
    repositories: RepositoriesDep,
    role: Optional[UserRole] = Query(None, description="Filter by role")
):
    """List users, optionally only one role."""
    users = ListUsersUseCase(repositories).execute(role)
    return [UserResponseDTO.from_domain(user) for user in users]


@router.get("/{user_id}", response_model=UserResponseDTO)
def get_user(user_id: str, admin: AdminUser, repositories: RepositoriesDep):
    return UserResponseDTO.from_domain(GetUserUseCase(repositories).execute(user_id))
