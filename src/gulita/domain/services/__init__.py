"""Domain services.

Services hold the business rules. Each is constructed once per process and
opens its own database session per operation.
"""

from gulita.domain.services.auth_service import AuthService
from gulita.domain.services.blog_service import BlogPage, BlogService
from gulita.domain.services.check_service import CheckService
from gulita.domain.services.password_validator import (
    PasswordValidationError,
    PasswordValidator,
    default_password_validator,
)
from gulita.domain.services.user_service import UserService

__all__ = [
    "AuthService",
    "BlogPage",
    "BlogService",
    "CheckService",
    "PasswordValidationError",
    "PasswordValidator",
    "UserService",
    "default_password_validator",
]
