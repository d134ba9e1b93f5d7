"""Password validation service.

Validates password strength according to configurable rules:
- Minimum and maximum length
- Uppercase letter requirement
- Lowercase letter requirement
- Digit requirement
- Special character requirement
"""

import re
from dataclasses import dataclass

from gulita.domain.entities.user import MIN_PASSWORD_LENGTH


@dataclass(frozen=True)
class PasswordValidationError:
    """Represents a password validation error.

    Attributes:
        field: The field name being validated.
        message: Human-readable error message.
        code: Machine-readable error code.
    """

    field: str
    message: str
    code: str


class PasswordValidator:
    """Validates password strength.

    The default policy applies when a user changes their password:
    8 to 128 characters with upper and lower case letters, a digit and a
    special character. Registration only enforces the minimum length.
    """

    SPECIAL_CHARS = r"!@#$%^&*()_+\-=\[\]{};':\"\\|,.<>\/?`~"

    def __init__(
        self,
        min_length: int = MIN_PASSWORD_LENGTH,
        max_length: int = 128,
        require_uppercase: bool = True,
        require_lowercase: bool = True,
        require_digit: bool = True,
        require_special: bool = True,
    ) -> None:
        self.min_length = min_length
        self.max_length = max_length
        self.require_uppercase = require_uppercase
        self.require_lowercase = require_lowercase
        self.require_digit = require_digit
        self.require_special = require_special

    def validate(self, password: str, field: str = "password") -> list[PasswordValidationError]:
        """Validate a password against the policy.

        Args:
            password: The password to validate.
            field: Name reported in the errors.

        Returns:
            List of validation errors. Empty list if password is valid.
        """
        errors: list[PasswordValidationError] = []

        if len(password) < self.min_length:
            errors.append(
                PasswordValidationError(
                    field=field,
                    message=f"Password must be at least {self.min_length} characters",
                    code="password_too_short",
                )
            )

        if len(password) > self.max_length:
            errors.append(
                PasswordValidationError(
                    field=field,
                    message=f"Password must not exceed {self.max_length} characters",
                    code="password_too_long",
                )
            )

        if self.require_uppercase and not re.search(r"[A-Z]", password):
            errors.append(
                PasswordValidationError(
                    field=field,
                    message="Password must contain at least one uppercase letter",
                    code="password_no_uppercase",
                )
            )

        if self.require_lowercase and not re.search(r"[a-z]", password):
            errors.append(
                PasswordValidationError(
                    field=field,
                    message="Password must contain at least one lowercase letter",
                    code="password_no_lowercase",
                )
            )

        if self.require_digit and not re.search(r"\d", password):
            errors.append(
                PasswordValidationError(
                    field=field,
                    message="Password must contain at least one digit",
                    code="password_no_digit",
                )
            )

        if self.require_special and not re.search(f"[{self.SPECIAL_CHARS}]", password):
            errors.append(
                PasswordValidationError(
                    field=field,
                    message="Password must contain at least one special character",
                    code="password_no_special",
                )
            )

        return errors

    def is_valid(self, password: str) -> bool:
        """Check if a password is valid."""
        return len(self.validate(password)) == 0


default_password_validator = PasswordValidator()
