"""Domain entities."""

from gulita.domain.entities.auth import LoginResult, TokenPair
from gulita.domain.entities.blog import BLOG_CATEGORIES, BLOG_STATUSES, MAX_TAGS
from gulita.domain.entities.check import (
    DIABETES_RESULTS,
    EDUCATION_LEVELS,
    HEALTH_STATUSES,
    HealthCheckInput,
)
from gulita.domain.entities.user import (
    MIN_PASSWORD_LENGTH,
    AuthenticatedUser,
    User,
    normalize_email,
)

__all__ = [
    "AuthenticatedUser",
    "BLOG_CATEGORIES",
    "BLOG_STATUSES",
    "DIABETES_RESULTS",
    "EDUCATION_LEVELS",
    "HEALTH_STATUSES",
    "HealthCheckInput",
    "LoginResult",
    "MAX_TAGS",
    "MIN_PASSWORD_LENGTH",
    "TokenPair",
    "User",
    "normalize_email",
]
