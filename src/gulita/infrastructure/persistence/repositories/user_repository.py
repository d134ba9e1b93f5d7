"""User repository for database operations."""

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from gulita.infrastructure.persistence.errors import translate_connection_errors
from gulita.infrastructure.persistence.models import UserModel
from gulita.infrastructure.persistence.types import utcnow


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    @translate_connection_errors
    async def create(self, user: UserModel) -> UserModel:
        """Create a new user.

        Args:
            user: User model to create.

        Returns:
            Created user model.
        """
        self.session.add(user)
        await self.session.flush()
        return user

    @translate_connection_errors
    async def find_by_id(self, user_id: str) -> UserModel | None:
        """Get a user by ID.

        Args:
            user_id: User ID (UUID string).

        Returns:
            User model if found, None otherwise.
        """
        result = await self.session.execute(select(UserModel).where(UserModel.id == user_id))
        return result.scalar_one_or_none()

    @translate_connection_errors
    async def find_by_email(self, email: str) -> UserModel | None:
        """Get a user by email address.

        Args:
            email: User's email address.

        Returns:
            User model if found, None otherwise.
        """
        result = await self.session.execute(select(UserModel).where(UserModel.email == email))
        return result.scalar_one_or_none()

    @translate_connection_errors
    async def find_by_username(self, username: str) -> UserModel | None:
        """Get a user by username."""
        result = await self.session.execute(
            select(UserModel).where(UserModel.username == username)
        )
        return result.scalar_one_or_none()

    @translate_connection_errors
    async def update_profile(
        self,
        user_id: str,
        username: str | None = None,
        email: str | None = None,
    ) -> UserModel | None:
        """Update the editable profile fields of a user.

        Args:
            user_id: User ID (UUID string).
            username: New username, left unchanged when None.
            email: New email address, left unchanged when None.

        Returns:
            The updated user model, or None if the user does not exist.
        """
        values: dict[str, object] = {"updated_at": utcnow()}
        if username is not None:
            values["username"] = username
        if email is not None:
            values["email"] = email

        result = await self.session.execute(
            update(UserModel).where(UserModel.id == user_id).values(**values)
        )
        if result.rowcount == 0:
            return None
        await self.session.flush()
        return await self._refetch(user_id)

    @translate_connection_errors
    async def update_password(self, user_id: str, password_hash: str) -> bool:
        """Replace a user's password hash.

        Args:
            user_id: User ID (UUID string).
            password_hash: New argon2 hash.

        Returns:
            True if the user exists and was updated.
        """
        result = await self.session.execute(
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(password_hash=password_hash, updated_at=utcnow())
        )
        return result.rowcount > 0

    async def _refetch(self, user_id: str) -> UserModel | None:
        result = await self.session.execute(
            select(UserModel)
            .where(UserModel.id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()
