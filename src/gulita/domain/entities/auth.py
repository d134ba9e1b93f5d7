"""Results of authentication operations."""

from dataclasses import dataclass

from gulita.domain.entities.user import User


@dataclass(frozen=True)
class TokenPair:
    """Freshly issued access and refresh tokens.

    Attributes:
        access_token: Signed JWT access token.
        refresh_token: Opaque refresh token.
        expires_in: Access token lifetime in seconds.
    """

    access_token: str
    refresh_token: str
    expires_in: int


@dataclass(frozen=True)
class LoginResult:
    """Outcome of a successful login."""

    user: User
    access_token: str
    refresh_token: str
    expires_in: int
