"""
Authentication router.
Handles password login and the current-user lookup.
"""

from fastapi import APIRouter

from timebill.application.dto.user_dto import LoginRequestDTO, TokenResponseDTO, UserResponseDTO
from timebill.application.use_cases.user_use_cases import AuthenticateUserUseCase
from timebill.infrastructure.auth.dependencies import CurrentUser
from timebill.infrastructure.web.dependencies import (
    ClockDep,
    JWTHandlerDep,
    PasswordHasherDep,
    RepositoriesDep,
)

router = APIRouter()


@router.post("/login", response_model=TokenResponseDTO)
def login(
    request: LoginRequestDTO,
    repositories: RepositoriesDep,
    password_hasher: PasswordHasherDep,
    jwt_handler: JWTHandlerDep,
    clock: ClockDep
):
    """
    Exchange email and password for a bearer token.

    - **email**: Account email
    - **password**: Account password
    """
    use_case = AuthenticateUserUseCase(repositories, password_hasher, jwt_handler, clock)
    result = use_case.execute(request.email, request.password)
    return TokenResponseDTO(
        access_token=result.access_token,
        expires_in=result.expires_in,
        user=UserResponseDTO.from_domain(result.user),
    )


@router.get("/me", response_model=UserResponseDTO)
def get_me(user: CurrentUser):
    """Get the authenticated user's profile."""
    return UserResponseDTO.from_domain(user)
