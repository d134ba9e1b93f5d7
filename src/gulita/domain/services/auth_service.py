"""Authentication service.

Orchestrates registration, login, refresh-token rotation and logout on top
of the password hasher, the JWT service and the refresh token store.
"""

from sqlalchemy.exc import IntegrityError

from gulita.core.exceptions import (
    DuplicateUserError,
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    UserNotFoundError,
    UsernameAlreadyExistsError,
    ValidationError,
)
from gulita.core.logging import get_logger
from gulita.domain.entities.auth import LoginResult, TokenPair
from gulita.domain.entities.user import (
    MIN_PASSWORD_LENGTH,
    AuthenticatedUser,
    User,
    normalize_email,
)
from gulita.infrastructure.auth.jwt_service import JWTService
from gulita.infrastructure.auth.password_hasher import (
    dummy_password_hash,
    hash_password,
    needs_rehash,
    verify_password,
)
from gulita.infrastructure.persistence.database import SessionScope
from gulita.infrastructure.persistence.models import UserModel
from gulita.infrastructure.persistence.repositories import (
    RefreshTokenRepository,
    UserRepository,
)

logger = get_logger(__name__)


async def duplicate_user_error(
    users: UserRepository,
    email: str,
    user_id: str | None = None,
) -> DuplicateUserError:
    """Work out which unique column a failed user insert/update collided on.

    Args:
        users: Repository on the rolled-back session.
        email: Email address the failed write used.
        user_id: The user being updated, whose own row is not a collision.
    """
    other = await users.find_by_email(email)
    if other is not None and other.id != user_id:
        return EmailAlreadyExistsError()
    return UsernameAlreadyExistsError()


class AuthService:
    """Service for the authentication and token lifecycle.

    Constructed once per process. Each operation runs in its own session
    obtained from ``session_scope`` and commits on success.
    """

    def __init__(self, session_scope: SessionScope, jwt_service: JWTService) -> None:
        """Initialize the auth service.

        Args:
            session_scope: Factory for one unit of work (e.g. ``DatabaseManager.session``).
            jwt_service: Token issuer/verifier.
        """
        self._session_scope = session_scope
        self.jwt_service = jwt_service

    async def register(self, username: str, email: str, password: str) -> User:
        """Create a new user account.

        Args:
            username: Desired username.
            email: Email address.
            password: Plaintext password, at least 8 characters.

        Returns:
            The created user without the password hash.

        Raises:
            ValidationError: If a field is missing or the password is too short.
            EmailAlreadyExistsError: If the email is taken.
            UsernameAlreadyExistsError: If the username is taken.
        """
        username = (username or "").strip()
        email = normalize_email(email)
        if not username or not email or not password:
            raise ValidationError(details="Username, email and password are required")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                details=f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )

        async with self._session_scope() as session:
            users = UserRepository(session)

            if await users.find_by_email(email) is not None:
                raise EmailAlreadyExistsError()
            if await users.find_by_username(username) is not None:
                raise UsernameAlreadyExistsError()

            user = UserModel(
                username=username,
                email=email,
                password_hash=hash_password(password),
            )
            try:
                await users.create(user)
                await session.commit()
            except IntegrityError as e:
                # Lost a race with a concurrent registration
                await session.rollback()
                raise await duplicate_user_error(users, email) from e

        logger.info("User registered", user_id=user.id, username=username)
        return User.from_model(user)

    async def login(self, email: str, password: str) -> LoginResult:
        """Authenticate with email and password and open a session.

        Args:
            email: Email address.
            password: Plaintext password.

        Returns:
            The user, a new access token, a new refresh token and the access
            token lifetime in seconds.

        Raises:
            ValidationError: If either field is missing.
            UserNotFoundError: If no user has this email.
            InvalidCredentialsError: If the password is wrong.
        """
        email = normalize_email(email)
        if not email or not password:
            raise ValidationError(details="Email and password are required")

        async with self._session_scope() as session:
            users = UserRepository(session)
            tokens = RefreshTokenRepository(session)

            user = await users.find_by_email(email)
            if user is None:
                verify_password(password, dummy_password_hash())
                logger.info("Login failed: unknown email")
                raise UserNotFoundError()

            if not verify_password(password, user.password_hash):
                logger.info("Login failed: invalid password", user_id=user.id)
                raise InvalidCredentialsError()

            if needs_rehash(user.password_hash):
                await users.update_password(user.id, hash_password(password))
                logger.info("Password hash upgraded", user_id=user.id)

            access_token = self.jwt_service.issue_access_token(user.id, user.email, user.username)
            refresh_token = self.jwt_service.issue_refresh_token()
            await tokens.store(user.id, refresh_token, self.jwt_service.refresh_token_expires_at())
            await session.commit()

        logger.info("User logged in", user_id=user.id)
        return LoginResult(
            user=User.from_model(user),
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=self.jwt_service.expires_in,
        )

    async def refresh(self, refresh_token: str) -> TokenPair:
        """Rotate a refresh token and issue a new access token.

        The presented token is consumed: it is deleted and replaced by a new
        one in the same transaction. Presenting it again fails.

        Args:
            refresh_token: The refresh token obtained at login or last refresh.

        Returns:
            New access and refresh tokens.

        Raises:
            ValidationError: If the token is missing.
            InvalidRefreshTokenError: If the token is unknown, expired or already used.
            UserNotFoundError: If the owning user no longer exists.
        """
        if not refresh_token:
            raise ValidationError(details="Refresh token is required")

        async with self._session_scope() as session:
            tokens = RefreshTokenRepository(session)
            users = UserRepository(session)

            stored = await tokens.find(refresh_token)
            if stored is None:
                logger.info("Refresh failed: unknown or expired token")
                raise InvalidRefreshTokenError()

            user = await users.find_by_id(stored.user_id)
            if user is None:
                raise UserNotFoundError()

            access_token = self.jwt_service.issue_access_token(user.id, user.email, user.username)
            new_refresh_token = self.jwt_service.issue_refresh_token()
            replaced = await tokens.replace(
                refresh_token,
                user.id,
                new_refresh_token,
                self.jwt_service.refresh_token_expires_at(),
            )
            if replaced is None:
                logger.warning("Refresh failed: token consumed concurrently", user_id=user.id)
                raise InvalidRefreshTokenError()
            await session.commit()

        logger.info("Refresh token rotated", user_id=user.id)
        return TokenPair(
            access_token=access_token,
            refresh_token=new_refresh_token,
            expires_in=self.jwt_service.expires_in,
        )

    async def logout(self, refresh_token: str, user_id: str | None = None) -> None:
        """Revoke one refresh token.

        Args:
            refresh_token: The token to revoke.
            user_id: When given, only a token owned by this user is revoked.

        Raises:
            InvalidRefreshTokenError: If there was nothing to revoke.
        """
        if not refresh_token:
            raise InvalidRefreshTokenError()

        async with self._session_scope() as session:
            deleted = await RefreshTokenRepository(session).delete(refresh_token, user_id=user_id)
            if not deleted:
                raise InvalidRefreshTokenError()
            await session.commit()

        logger.info("User logged out", user_id=user_id)

    async def logout_all_devices(self, user_id: str) -> int:
        """Revoke every refresh token of a user.

        Args:
            user_id: Owner of the tokens.

        Returns:
            Number of tokens revoked; zero when there were none.

        Raises:
            ValidationError: If user_id is missing.
        """
        if not user_id:
            raise ValidationError(details="User ID is required")

        async with self._session_scope() as session:
            revoked = await RefreshTokenRepository(session).delete_all_for_user(user_id)
            await session.commit()

        logger.info("User logged out from all devices", user_id=user_id, revoked=revoked)
        return revoked

    def authenticate(self, access_token: str | None) -> AuthenticatedUser:
        """Resolve the identity behind an access token.

        Raises:
            TokenRequiredError: If no token was presented.
            InvalidTokenError: If the token is malformed or badly signed.
            TokenExpiredError: If the token is expired or too old.
        """
        claims = self.jwt_service.verify_access_token(access_token)
        return AuthenticatedUser.from_claims(claims)

    async def purge_expired_refresh_tokens(self) -> int:
        """Delete refresh tokens past their expiry.

        Returns:
            Number of tokens deleted.
        """
        async with self._session_scope() as session:
            purged = await RefreshTokenRepository(session).delete_expired()
            await session.commit()

        logger.info("Expired refresh tokens purged", count=purged)
        return purged
