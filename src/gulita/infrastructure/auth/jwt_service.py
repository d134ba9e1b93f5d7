"""JWT token service.

Signs and validates short-lived access tokens and generates the opaque
refresh tokens that are stored server-side.
"""

import secrets
import time
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from gulita.core.config import Settings, get_settings
from gulita.core.exceptions import (
    ConfigurationError,
    InvalidTokenError,
    TokenExpiredError,
    TokenRequiredError,
    ValidationError,
)

REQUIRED_CLAIMS = ["exp", "iat", "nbf", "iss", "aud"]


class JWTService:
    """Service for issuing and verifying tokens.

    Access tokens are stateless: validity depends only on signature,
    issuer, audience and time claims. Refresh tokens are random hex strings
    with no embedded claims.
    """

    def __init__(self, settings: Settings | None = None, secret_key: str | None = None) -> None:
        """Initialize the JWT service.

        Args:
            settings: Settings to read token parameters from. Defaults to the
                      cached application settings.
            secret_key: Secret key for signing tokens. Overrides the
                        configured ``jwt_secret`` when given.
        """
        self._settings = settings
        self._secret_key = secret_key

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    @property
    def secret_key(self) -> str:
        """Get the secret key for signing tokens.

        Raises:
            ConfigurationError: If no secret is configured.
        """
        secret = self._secret_key or self.settings.jwt_secret
        if not secret:
            raise ConfigurationError("JWT secret is not configured")
        return secret

    @property
    def expires_in(self) -> int:
        """Access token lifetime in seconds."""
        return self.settings.access_token_expire_seconds

    def issue_access_token(
        self,
        user_id: str,
        email: str,
        username: str | None = None,
        issued_at: datetime | None = None,
    ) -> str:
        """Create a signed access token.

        Args:
            user_id: The user's unique identifier.
            email: The user's email address.
            username: The user's username.
            issued_at: Issue time. Defaults to now; truncated to whole seconds.

        Returns:
            Encoded JWT access token.

        Raises:
            ValidationError: If user_id or email is missing.
            ConfigurationError: If the signing secret is unset.
        """
        if not user_id or not email:
            raise ValidationError("User id and email are required to issue a token")

        settings = self.settings
        now = (issued_at or datetime.now(timezone.utc)).replace(microsecond=0)
        expire = now + timedelta(minutes=settings.access_token_expire_minutes)

        payload = {
            "id": user_id,
            "sub": user_id,
            "email": email,
            "username": username,
            "type": "access",
            "iss": settings.jwt_issuer,
            "aud": settings.jwt_audience,
            "iat": now,
            "nbf": now,
            "exp": expire,
        }

        return jwt.encode(payload, self.secret_key, algorithm=settings.jwt_algorithm)

    def issue_refresh_token(self) -> str:
        """Generate an opaque refresh token.

        Returns:
            Hex-encoded random string of ``refresh_token_bytes`` bytes.
        """
        return secrets.token_hex(self.settings.refresh_token_bytes)

    def refresh_token_expires_at(self, now: datetime | None = None) -> datetime:
        """Absolute expiry for a refresh token issued at ``now``."""
        now = now or datetime.now(timezone.utc)
        return now + timedelta(days=self.settings.refresh_token_expire_days)

    def verify_access_token(self, token: str | None) -> dict[str, Any]:
        """Decode and validate an access token.

        Checks signature, issuer, audience, not-before and expiry with the
        configured leeway, then enforces the maximum token age on ``iat``.

        Args:
            token: The encoded JWT token.

        Returns:
            Decoded token claims.

        Raises:
            TokenRequiredError: If the token is empty.
            TokenExpiredError: If the token has expired or is too old.
            InvalidTokenError: If the token is malformed, badly signed or not an access token.
        """
        if not token:
            raise TokenRequiredError()

        settings = self.settings
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[settings.jwt_algorithm],
                issuer=settings.jwt_issuer,
                audience=settings.jwt_audience,
                leeway=settings.token_leeway_seconds,
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError() from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError() from e

        if payload.get("type") != "access":
            raise InvalidTokenError("Not an access token")
        if not payload.get("id") or not payload.get("email"):
            raise InvalidTokenError("Token is missing identity claims")

        age = time.time() - payload["iat"]
        if age > settings.access_token_max_age_seconds + settings.token_leeway_seconds:
            raise TokenExpiredError("Token exceeds maximum age")

        return payload
