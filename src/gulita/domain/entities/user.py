"""User entities.

``User`` is the public view of an account: it never carries the password
hash. ``AuthenticatedUser`` is the identity recovered from an access token.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class User:
    """Public user record returned by the services.

    Attributes:
        id: Unique identifier (UUID string).
        username: Unique username.
        email: Unique email address.
        created_at: Timestamp when the user was created.
        updated_at: Timestamp when the user was last updated.
    """

    id: str
    username: str
    email: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_model(cls, model: Any) -> "User":
        """Build the public view from a persisted user, dropping the hash."""
        return cls(
            id=model.id,
            username=model.username,
            email=model.email,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity carried by a verified access token."""

    id: str
    email: str
    username: str | None = None

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "AuthenticatedUser":
        return cls(id=claims["id"], email=claims["email"], username=claims.get("username"))


MIN_PASSWORD_LENGTH = 8


def normalize_email(email: str | None) -> str:
    """Canonical form used for storage and lookup."""
    return (email or "").strip().lower()
