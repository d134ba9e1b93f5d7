"""Repositories for database access.

Repositories flush but never commit; the calling service owns the transaction.
"""

from gulita.infrastructure.persistence.repositories.blog_repository import BlogRepository
from gulita.infrastructure.persistence.repositories.check_repository import CheckRepository
from gulita.infrastructure.persistence.repositories.refresh_token_repository import (
    RefreshTokenRepository,
)
from gulita.infrastructure.persistence.repositories.user_repository import UserRepository

__all__ = [
    "BlogRepository",
    "CheckRepository",
    "RefreshTokenRepository",
    "UserRepository",
]
