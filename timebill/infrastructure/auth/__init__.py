"""
Authentication infrastructure.
"""

from timebill.infrastructure.auth.jwt_handler import JWTHandler
from timebill.infrastructure.auth.password import BcryptPasswordHasher, hash_password, verify_password

__all__ = [
    "JWTHandler",
    "BcryptPasswordHasher",
    "hash_password",
    "verify_password",
]
