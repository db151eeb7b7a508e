"""
User provisioning and authentication use cases.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from timebill.application.dto.user_dto import CreateUserRequestDTO
from timebill.application.use_cases.base_use_case import BaseUseCase, Clock
from timebill.domain.models.audit_log import AuditEntityType
from timebill.domain.models.base import AuthenticationError, DuplicateEntityError
from timebill.domain.models.user import User, UserRole
from timebill.domain.repositories import Repositories

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


@dataclass(frozen=True)
class LoginResult:
    user: User
    access_token: str
    expires_in: int


class CreateUserUseCase(BaseUseCase):
    """Use case for provisioning an account. Emails are unique, case-insensitively."""

    def __init__(self, repositories: Repositories, password_hasher, clock: Optional[Clock] = None):
        super().__init__(repositories, clock)
        self.password_hasher = password_hasher

    def execute(self, actor_id: Optional[str], request: CreateUserRequestDTO) -> User:
        email = str(request.email).strip().lower()
        if self.repositories.users.get_by_email(email) is not None:
            raise DuplicateEntityError("User", "email", email)

        now = self.clock()
        user = User(
            email=email,
            name=request.name.strip(),
            role=UserRole(request.role),
            password_hash=self.password_hasher.hash(request.password),
            active=True,
            created_at=now,
            updated_at=now,
        )
        saved = self.repositories.users.save(user)
        self.audit.created(actor_id or saved.id, AuditEntityType.USER, saved)
        logger.info(f"User {saved.id} ({saved.role.value}) created")
        return saved


class ListUsersUseCase(BaseUseCase):
    def execute(self, role: Optional[UserRole] = None) -> List[User]:
        return self.repositories.users.list_all(role=UserRole(role) if role is not None else None)


class GetUserUseCase(BaseUseCase):
    def execute(self, user_id: str) -> User:
        return self._get_or_raise(self.repositories.users, "User", user_id)


class AuthenticateUserUseCase(BaseUseCase):
    """
    Use case for password login.
    Unknown email, inactive account and wrong password fail identically.
    """

    def __init__(self, repositories: Repositories, password_hasher, token_issuer, clock: Optional[Clock] = None):
        super().__init__(repositories, clock)
        self.password_hasher = password_hasher
        self.token_issuer = token_issuer

    def execute(self, email: str, password: str) -> LoginResult:
        user = self.repositories.users.get_by_email(email)
        if user is None or not user.active:
            raise AuthenticationError(INVALID_CREDENTIALS)
        if not self.password_hasher.verify(password, user.password_hash):
            logger.warning(f"Failed login for user {user.id}")
            raise AuthenticationError(INVALID_CREDENTIALS)

        token = self.token_issuer.create_access_token(user)
        logger.info(f"User {user.id} logged in")
        return LoginResult(
            user=user,
            access_token=token,
            expires_in=self.token_issuer.expire_minutes * 60,
        )
