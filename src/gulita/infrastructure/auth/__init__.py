"""Authentication infrastructure components.

This module provides password hashing and token services.
"""

from gulita.infrastructure.auth.jwt_service import JWTService
from gulita.infrastructure.auth.password_hasher import (
    dummy_password_hash,
    hash_password,
    needs_rehash,
    verify_password,
)

__all__ = [
    "JWTService",
    "dummy_password_hash",
    "hash_password",
    "needs_rehash",
    "verify_password",
]
