"""
Authentication dependencies for FastAPI.
Resolves the bearer token to a stored user and gates administrator routes.
"""

from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from timebill.domain.models.base import AuthenticationError, ForbiddenError
from timebill.domain.models.user import User
from timebill.infrastructure.web.dependencies import JWTHandlerDep, RepositoriesDep

# Missing credentials are reported through AuthenticationError, not FastAPI's 403.
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    repositories: RepositoriesDep,
    jwt_handler: JWTHandlerDep
) -> User:
    """
    FastAPI dependency to get the current authenticated user.

    Args:
        credentials: Bearer token credentials
        repositories: Request repositories
        jwt_handler: JWT handler instance

    Returns:
        The active user named by the token's ``sub`` claim

    Raises:
        AuthenticationError: If the token is missing, invalid or names no active user
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()

    user_id = jwt_handler.get_user_id(credentials.credentials)
    user = repositories.users.get_by_id(user_id)
    if user is None or not user.active:
        raise AuthenticationError("User not found or inactive")
    return user


def require_admin(user: Annotated[User, Depends(get_current_user)]) -> User:
    """
    FastAPI dependency restricting a route to administrators.

    Raises:
        ForbiddenError: If the current user is not an administrator
    """
    if not user.is_admin:
        raise ForbiddenError("Administrator access required")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
AdminUser = Annotated[User, Depends(require_admin)]
