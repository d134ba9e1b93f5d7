"""SQLAlchemy model for refresh tokens.

A row exists only while its token is usable: rotation, logout and
logout-all delete rows instead of flagging them. The ``token`` column holds
the SHA-256 digest of the opaque value handed to the client.
"""

import uuid
from datetime import datetime

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gulita.infrastructure.persistence.database import Base
from gulita.infrastructure.persistence.types import UTCDateTime, utcnow


class RefreshTokenModel(Base):
    """Refresh token owned by a user."""

    __tablename__ = "refresh_tokens"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    token: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
    )
    expires_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utcnow,
    )

    user = relationship("UserModel", back_populates="refresh_tokens")

    def __repr__(self) -> str:
        return f"RefreshTokenModel(id={self.id!r}, user_id={self.user_id!r}, expires_at={self.expires_at!r})"
