"""Application error taxonomy.

Every error the services raise on purpose derives from :class:`GulitaError`
and carries a stable machine-readable ``code``. The HTTP layer maps codes to
status codes; anything outside this hierarchy is an unexpected failure.
"""

from typing import Any


class GulitaError(Exception):
    """Base class for all expected application errors."""

    code = "INTERNAL_SERVER_ERROR"
    default_message = "An unexpected error occurred"

    def __init__(self, message: str | None = None, details: Any = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(GulitaError):
    """Raised when input is missing or malformed."""

    code = "VALIDATION_ERROR"
    default_message = "Validation failed"


class DuplicateUserError(GulitaError):
    """Raised when a username or email is already taken."""

    code = "DUPLICATE_USER"
    default_message = "User already exists"


class EmailAlreadyExistsError(DuplicateUserError):
    code = "DUPLICATE_EMAIL"
    default_message = "Email already exists"


class UsernameAlreadyExistsError(DuplicateUserError):
    code = "DUPLICATE_USERNAME"
    default_message = "Username already exists"


class UserNotFoundError(GulitaError):
    code = "USER_NOT_FOUND"
    default_message = "User not found"


class InvalidCredentialsError(GulitaError):
    code = "INVALID_CREDENTIALS"
    default_message = "Invalid email or password"


class InvalidCurrentPasswordError(GulitaError):
    code = "INVALID_CURRENT_PASSWORD"
    default_message = "Current password is incorrect"


class TokenError(GulitaError):
    """Base class for access token failures."""

    code = "INVALID_TOKEN"
    default_message = "Invalid token"


class TokenRequiredError(TokenError):
    code = "TOKEN_REQUIRED"
    default_message = "Authentication token is required"


class InvalidTokenError(TokenError):
    code = "INVALID_TOKEN"
    default_message = "Invalid token"


class TokenExpiredError(TokenError):
    code = "TOKEN_EXPIRED"
    default_message = "Token has expired"


class InvalidRefreshTokenError(GulitaError):
    """Raised when a refresh token is unknown, expired or already consumed."""

    code = "INVALID_REFRESH_TOKEN"
    default_message = "Invalid or expired refresh token"


class ForbiddenError(GulitaError):
    code = "FORBIDDEN_ACCESS"
    default_message = "You do not have permission to perform this action"


class BlogNotFoundError(GulitaError):
    code = "BLOG_NOT_FOUND"
    default_message = "Blog not found"


class DuplicateBlogTitleError(GulitaError):
    code = "DUPLICATE_BLOG_TITLE"
    default_message = "A blog with this title already exists"


class InvalidCategoryError(GulitaError):
    code = "INVALID_CATEGORY"
    default_message = "Invalid blog category provided"


class CheckNotFoundError(GulitaError):
    code = "NOT_FOUND"
    default_message = "Health check record not found"


class ServiceUnavailableError(GulitaError):
    """Raised when a backing service (database, inference endpoint) is unreachable."""

    code = "SERVICE_UNAVAILABLE"
    default_message = "Service temporarily unavailable"


class ConfigurationError(GulitaError):
    """Raised when required configuration is missing."""

    default_message = "Server is misconfigured"


class HashingError(GulitaError):
    default_message = "Password hashing failed"


class ComparisonError(GulitaError):
    default_message = "Password comparison failed"
