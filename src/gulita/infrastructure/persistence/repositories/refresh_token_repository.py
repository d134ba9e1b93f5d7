"""Repository for refresh token operations.

Stores, looks up, rotates and deletes refresh tokens. Raw token values never
reach the database: every method hashes its input with SHA-256 first.
"""

import hashlib
from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from gulita.infrastructure.persistence.errors import translate_connection_errors
from gulita.infrastructure.persistence.models import RefreshTokenModel
from gulita.infrastructure.persistence.types import utcnow


class RefreshTokenRepository:
    """Repository for refresh token database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self._session = session

    @staticmethod
    def hash_token(token: str) -> str:
        """Hash a token using SHA-256.

        Args:
            token: The raw refresh token string.

        Returns:
            SHA-256 hex digest of the token.
        """
        return hashlib.sha256(token.encode()).hexdigest()

    @translate_connection_errors
    async def store(self, user_id: str, token: str, expires_at: datetime) -> RefreshTokenModel:
        """Store a new refresh token.

        Args:
            user_id: Owner of the token.
            token: The raw refresh token string.
            expires_at: Absolute expiry.

        Returns:
            The stored model.
        """
        model = RefreshTokenModel(
            user_id=user_id,
            token=self.hash_token(token),
            expires_at=expires_at,
        )
        self._session.add(model)
        await self._session.flush()
        return model

    @translate_connection_errors
    async def find(self, token: str) -> RefreshTokenModel | None:
        """Look up an unexpired refresh token.

        Args:
            token: The raw refresh token string.

        Returns:
            The RefreshTokenModel if present and unexpired, None otherwise.
        """
        stmt = select(RefreshTokenModel).where(
            RefreshTokenModel.token == self.hash_token(token),
            RefreshTokenModel.expires_at > utcnow(),
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @translate_connection_errors
    async def replace(
        self,
        old_token: str,
        user_id: str,
        new_token: str,
        expires_at: datetime,
    ) -> RefreshTokenModel | None:
        """Swap an existing refresh token for a new one.

        The old row is removed with a single conditional DELETE; the new row
        is only inserted when that DELETE hit exactly one live row owned by
        ``user_id``. Must run inside the caller's transaction so the swap
        commits or rolls back as a whole. Under concurrent rotation of the
        same token only one caller sees a deleted row.

        Args:
            old_token: The raw refresh token being consumed.
            user_id: Expected owner of the old token.
            new_token: The raw replacement token.
            expires_at: Absolute expiry of the replacement.

        Returns:
            The new model, or None if the old token was already gone.
        """
        result = await self._session.execute(
            delete(RefreshTokenModel).where(
                RefreshTokenModel.token == self.hash_token(old_token),
                RefreshTokenModel.user_id == user_id,
                RefreshTokenModel.expires_at > utcnow(),
            )
        )
        if result.rowcount != 1:
            return None

        model = RefreshTokenModel(
            user_id=user_id,
            token=self.hash_token(new_token),
            expires_at=expires_at,
        )
        self._session.add(model)
        await self._session.flush()
        return model

    @translate_connection_errors
    async def delete(self, token: str, user_id: str | None = None) -> bool:
        """Delete a refresh token.

        Args:
            token: The raw refresh token string.
            user_id: When given, only a token owned by this user is deleted.

        Returns:
            True if a token was deleted, False if none matched.
        """
        stmt = delete(RefreshTokenModel).where(
            RefreshTokenModel.token == self.hash_token(token)
        )
        if user_id is not None:
            stmt = stmt.where(RefreshTokenModel.user_id == user_id)
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    @translate_connection_errors
    async def delete_all_for_user(self, user_id: str) -> int:
        """Delete every refresh token owned by a user.

        Returns:
            Number of tokens deleted.
        """
        result = await self._session.execute(
            delete(RefreshTokenModel).where(RefreshTokenModel.user_id == user_id)
        )
        return result.rowcount

    @translate_connection_errors
    async def delete_expired(self) -> int:
        """Delete refresh tokens past their expiry.

        Returns:
            Number of tokens deleted.
        """
        result = await self._session.execute(
            delete(RefreshTokenModel).where(RefreshTokenModel.expires_at <= utcnow())
        )
        return result.rowcount
