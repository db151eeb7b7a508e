"""
JWT token handler.
Issues and validates access tokens for authenticated users.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt as jose_jwt

from timebill.config import Settings, get_settings
from timebill.domain.models.base import AuthenticationError
from timebill.domain.models.user import User


class JWTHandler:
    """Handles JWT token creation, validation and user extraction."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.jwt_secret = self.settings.jwt_secret_key
        self.jwt_algorithm = self.settings.jwt_algorithm
        self.expire_minutes = self.settings.jwt_access_token_expire_minutes

    def create_access_token(self, user: User, now: Optional[datetime] = None) -> str:
        """
        Create a signed access token for ``user``.

        Args:
            user: Authenticated user
            now: Issue time, defaults to the current UTC time

        Returns:
            Encoded JWT string
        """
        issued_at = now or datetime.now(timezone.utc)
        if issued_at.tzinfo is None:
            issued_at = issued_at.replace(tzinfo=timezone.utc)
        payload = {
            "sub": user.id,
            "email": user.email,
            "role": user.role.value,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + timedelta(minutes=self.expire_minutes)).timestamp()),
        }
        return jose_jwt.encode(payload, self.jwt_secret, algorithm=self.jwt_algorithm)

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a JWT token.

        Args:
            token: JWT token string

        Returns:
            Dict containing token payload

        Raises:
            AuthenticationError: If token is invalid or expired
        """
        if token.startswith("Bearer "):
            token = token[7:]

        try:
            payload = jose_jwt.decode(
                token,
                self.jwt_secret,
                algorithms=[self.jwt_algorithm],
                options={"verify_exp": True, "verify_aud": False}
            )
        except JWTError as e:
            raise AuthenticationError(f"Invalid token: {str(e)}")

        if "sub" not in payload:
            raise AuthenticationError("Token missing user ID (sub claim)")
        if "exp" not in payload:
            raise AuthenticationError("Token missing expiration (exp claim)")

        return payload

    def get_user_id(self, token: str) -> str:
        """
        Extract user ID from JWT token.

        Raises:
            AuthenticationError: If token is invalid
        """
        return self.verify_token(token)["sub"]

    def is_token_valid(self, token: str) -> bool:
        """Check if token is valid without raising exceptions."""
        try:
            self.verify_token(token)
            return True
        except AuthenticationError:
            return False
