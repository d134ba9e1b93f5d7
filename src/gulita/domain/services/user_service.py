"""User profile service.

Reads and edits the authenticated user's own profile and changes passwords.
"""

from sqlalchemy.exc import IntegrityError

from gulita.core.exceptions import (
    EmailAlreadyExistsError,
    InvalidCurrentPasswordError,
    UserNotFoundError,
    UsernameAlreadyExistsError,
    ValidationError,
)
from gulita.core.logging import get_logger
from gulita.domain.entities.user import User, normalize_email
from gulita.domain.services.auth_service import duplicate_user_error
from gulita.domain.services.password_validator import (
    PasswordValidator,
    default_password_validator,
)
from gulita.infrastructure.auth.password_hasher import hash_password, verify_password
from gulita.infrastructure.persistence.database import SessionScope
from gulita.infrastructure.persistence.repositories import (
    RefreshTokenRepository,
    UserRepository,
)

logger = get_logger(__name__)


class UserService:
    """Service for user profile management."""

    def __init__(
        self,
        session_scope: SessionScope,
        password_validator: PasswordValidator = default_password_validator,
    ) -> None:
        """Initialize the user service.

        Args:
            session_scope: Factory for one unit of work.
            password_validator: Policy applied to new passwords.
        """
        self._session_scope = session_scope
        self.password_validator = password_validator

    async def get_profile(self, user_id: str) -> User:
        """Get a user's profile.

        Raises:
            ValidationError: If user_id is missing.
            UserNotFoundError: If the user does not exist.
        """
        if not user_id:
            raise ValidationError(details="User ID is required")

        async with self._session_scope() as session:
            user = await UserRepository(session).find_by_id(user_id)

        if user is None:
            raise UserNotFoundError()
        return User.from_model(user)

    async def update_profile(
        self,
        user_id: str,
        username: str | None = None,
        email: str | None = None,
    ) -> User:
        """Change a user's username and/or email.

        Args:
            user_id: The user being edited.
            username: New username, unchanged when None.
            email: New email address, unchanged when None.

        Returns:
            The updated profile.

        Raises:
            ValidationError: If nothing is supplied to update.
            UserNotFoundError: If the user does not exist.
            UsernameAlreadyExistsError: If another user has the username.
            EmailAlreadyExistsError: If another user has the email.
        """
        if not user_id:
            raise ValidationError(details="User ID is required")
        if username is not None:
            username = username.strip()
        if email is not None:
            email = normalize_email(email)
        if not username and not email:
            raise ValidationError(details="At least one field must be provided for update")

        async with self._session_scope() as session:
            users = UserRepository(session)
            user = await users.find_by_id(user_id)
            if user is None:
                raise UserNotFoundError()

            if username and username != user.username:
                other = await users.find_by_username(username)
                if other is not None and other.id != user_id:
                    raise UsernameAlreadyExistsError()
            if email and email != user.email:
                other = await users.find_by_email(email)
                if other is not None and other.id != user_id:
                    raise EmailAlreadyExistsError()

            target_email = email or user.email
            try:
                updated = await users.update_profile(
                    user_id,
                    username=username or None,
                    email=email or None,
                )
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise await duplicate_user_error(users, target_email, user_id=user_id) from e

        if updated is None:
            raise UserNotFoundError()
        logger.info("Profile updated", user_id=user_id)
        return User.from_model(updated)

    async def change_password(
        self,
        user_id: str,
        current_password: str,
        new_password: str,
    ) -> int:
        """Change a user's password and end all their sessions.

        Args:
            user_id: The user changing their password.
            current_password: Password currently set.
            new_password: Replacement password; must satisfy the password
                          policy and differ from the current one.

        Returns:
            Number of refresh tokens revoked.

        Raises:
            ValidationError: If a field is missing or the new password is rejected.
            UserNotFoundError: If the user does not exist.
            InvalidCurrentPasswordError: If the current password is wrong.
        """
        if not user_id:
            raise ValidationError(details="User ID is required")
        if not current_password:
            raise ValidationError(details="Current password is required")
        if not new_password:
            raise ValidationError(details="New password is required")

        errors = self.password_validator.validate(new_password, field="new_password")
        if errors:
            raise ValidationError(
                details=[{"field": error.field, "message": error.message} for error in errors]
            )
        if current_password == new_password:
            raise ValidationError(details="New password must be different from current password")

        async with self._session_scope() as session:
            users = UserRepository(session)
            user = await users.find_by_id(user_id)
            if user is None:
                raise UserNotFoundError()

            if not verify_password(current_password, user.password_hash):
                logger.info("Password change rejected: wrong current password", user_id=user_id)
                raise InvalidCurrentPasswordError()

            await users.update_password(user_id, hash_password(new_password))
            revoked = await RefreshTokenRepository(session).delete_all_for_user(user_id)
            await session.commit()

        logger.info("Password changed", user_id=user_id, sessions_revoked=revoked)
        return revoked
