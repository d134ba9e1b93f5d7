"""Unit tests for AuthService."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import func, select, update

from gulita.core.exceptions import (
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    InvalidTokenError,
    TokenRequiredError,
    UserNotFoundError,
    UsernameAlreadyExistsError,
    ValidationError,
)
from gulita.domain.services import AuthService
from gulita.infrastructure.auth import JWTService
from gulita.infrastructure.persistence.models import RefreshTokenModel, UserModel
from gulita.infrastructure.persistence.repositories import (
    RefreshTokenRepository,
    UserRepository,
)
from gulita.infrastructure.persistence.types import utcnow

PASSWORD = "Password123!"


@pytest.fixture
def auth_service(db) -> AuthService:
    return AuthService(db.session, JWTService())


async def token_count(db, user_id: str) -> int:
    async with db.session() as session:
        result = await session.execute(
            select(func.count(RefreshTokenModel.id)).where(
                RefreshTokenModel.user_id == user_id,
                RefreshTokenModel.expires_at > utcnow(),
            )
        )
        return result.scalar_one()


def missing_on_first_lookup(lookup):
    """Make a repository finder miss once, as if a concurrent write had not landed yet."""
    calls = []

    async def finder(self, value):
        if not calls:
            calls.append(value)
            return None
        return await lookup(self, value)

    return finder


class TestRegister:
    @pytest.mark.asyncio
    async def test_register_returns_public_user(self, auth_service, db):
        user = await auth_service.register("alice", "Alice@Example.com", PASSWORD)

        assert user.username == "alice"
        assert user.email == "alice@example.com"
        assert not hasattr(user, "password_hash")

        async with db.session() as session:
            stored = await session.get(UserModel, user.id)
        assert stored.password_hash.startswith("$argon2id$")

    @pytest.mark.asyncio
    async def test_duplicate_email(self, auth_service):
        await auth_service.register("alice", "alice@example.com", PASSWORD)

        with pytest.raises(EmailAlreadyExistsError):
            await auth_service.register("alice2", "ALICE@example.com", PASSWORD)

    @pytest.mark.asyncio
    async def test_duplicate_username(self, auth_service):
        await auth_service.register("alice", "alice@example.com", PASSWORD)

        with pytest.raises(UsernameAlreadyExistsError):
            await auth_service.register("alice", "other@example.com", PASSWORD)

    @pytest.mark.asyncio
    async def test_email_collision_at_insert(self, auth_service, db):
        await auth_service.register("alice", "alice@example.com", PASSWORD)

        finder = missing_on_first_lookup(UserRepository.find_by_email)
        with patch.object(UserRepository, "find_by_email", finder):
            with pytest.raises(EmailAlreadyExistsError):
                await auth_service.register("bob", "alice@example.com", PASSWORD)

        async with db.session() as session:
            assert await UserRepository(session).find_by_username("bob") is None

    @pytest.mark.asyncio
    async def test_username_collision_at_insert(self, auth_service):
        await auth_service.register("alice", "alice@example.com", PASSWORD)

        with patch.object(UserRepository, "find_by_username", AsyncMock(return_value=None)):
            with pytest.raises(UsernameAlreadyExistsError):
                await auth_service.register("alice", "bob@example.com", PASSWORD)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("username", "email", "password"),
        [
            ("", "a@example.com", PASSWORD),
            ("alice", "", PASSWORD),
            ("alice", "a@example.com", ""),
            ("alice", "a@example.com", "short"),
        ],
    )
    async def test_invalid_input(self, auth_service, username, email, password):
        with pytest.raises(ValidationError):
            await auth_service.register(username, email, password)


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_issues_tokens(self, auth_service, db):
        user = await auth_service.register("alice", "alice@example.com", PASSWORD)

        result = await auth_service.login(" ALICE@example.com ", PASSWORD)

        assert result.user.id == user.id
        assert result.expires_in == 900
        assert len(result.refresh_token) == 128
        assert auth_service.authenticate(result.access_token).id == user.id
        assert await token_count(db, user.id) == 1

    @pytest.mark.asyncio
    async def test_each_login_is_a_separate_session(self, auth_service, db):
        user = await auth_service.register("alice", "alice@example.com", PASSWORD)

        first = await auth_service.login("alice@example.com", PASSWORD)
        second = await auth_service.login("alice@example.com", PASSWORD)

        assert first.refresh_token != second.refresh_token
        assert await token_count(db, user.id) == 2

    @pytest.mark.asyncio
    async def test_unknown_email(self, auth_service):
        with patch(
            "gulita.domain.services.auth_service.verify_password",
            return_value=False,
        ) as verify:
            with pytest.raises(UserNotFoundError):
                await auth_service.login("nobody@example.com", PASSWORD)

        # The unknown-user branch still performs a hash comparison
        verify.assert_called_once()

    @pytest.mark.asyncio
    async def test_wrong_password(self, auth_service, db):
        user = await auth_service.register("alice", "alice@example.com", PASSWORD)

        with pytest.raises(InvalidCredentialsError):
            await auth_service.login("alice@example.com", "WrongPassword1!")
        assert await token_count(db, user.id) == 0

    @pytest.mark.asyncio
    async def test_missing_fields(self, auth_service):
        with pytest.raises(ValidationError):
            await auth_service.login("", PASSWORD)

    @pytest.mark.asyncio
    async def test_outdated_hash_upgraded(self, auth_service, db):
        from argon2 import PasswordHasher

        user = await auth_service.register("alice", "alice@example.com", PASSWORD)
        old_hash = PasswordHasher(time_cost=2, memory_cost=16, parallelism=1).hash(PASSWORD)
        async with db.session() as session:
            await session.execute(
                update(UserModel).where(UserModel.id == user.id).values(password_hash=old_hash)
            )
            await session.commit()

        await auth_service.login("alice@example.com", PASSWORD)

        async with db.session() as session:
            stored = await session.get(UserModel, user.id)
        assert stored.password_hash != old_hash


class TestRefresh:
    @pytest.mark.asyncio
    async def test_refresh_rotates_token(self, auth_service, db):
        user = await auth_service.register("alice", "alice@example.com", PASSWORD)
        login = await auth_service.login("alice@example.com", PASSWORD)

        tokens = await auth_service.refresh(login.refresh_token)

        assert tokens.refresh_token != login.refresh_token
        assert auth_service.authenticate(tokens.access_token).id == user.id
        assert await token_count(db, user.id) == 1

    @pytest.mark.asyncio
    async def test_consumed_token_cannot_be_reused(self, auth_service):
        await auth_service.register("alice", "alice@example.com", PASSWORD)
        login = await auth_service.login("alice@example.com", PASSWORD)
        await auth_service.refresh(login.refresh_token)

        with pytest.raises(InvalidRefreshTokenError):
            await auth_service.refresh(login.refresh_token)

    @pytest.mark.asyncio
    async def test_rotated_token_can_be_refreshed_again(self, auth_service):
        await auth_service.register("alice", "alice@example.com", PASSWORD)
        login = await auth_service.login("alice@example.com", PASSWORD)

        first = await auth_service.refresh(login.refresh_token)
        second = await auth_service.refresh(first.refresh_token)

        assert second.refresh_token not in (login.refresh_token, first.refresh_token)

    @pytest.mark.asyncio
    async def test_unknown_token(self, auth_service):
        with pytest.raises(InvalidRefreshTokenError):
            await auth_service.refresh("f" * 128)

    @pytest.mark.asyncio
    async def test_missing_token(self, auth_service):
        with pytest.raises(ValidationError):
            await auth_service.refresh("")

    @pytest.mark.asyncio
    async def test_expired_token(self, auth_service, db):
        user = await auth_service.register("alice", "alice@example.com", PASSWORD)
        login = await auth_service.login("alice@example.com", PASSWORD)
        async with db.session() as session:
            await session.execute(
                update(RefreshTokenModel)
                .where(RefreshTokenModel.user_id == user.id)
                .values(expires_at=datetime.now(timezone.utc) - timedelta(seconds=1))
            )
            await session.commit()

        with pytest.raises(InvalidRefreshTokenError):
            await auth_service.refresh(login.refresh_token)

    @pytest.mark.asyncio
    async def test_lost_rotation_race(self, auth_service, db):
        """A token consumed between lookup and swap is rejected."""
        user = await auth_service.register("alice", "alice@example.com", PASSWORD)
        login = await auth_service.login("alice@example.com", PASSWORD)

        with patch.object(RefreshTokenRepository, "replace", return_value=None):
            with pytest.raises(InvalidRefreshTokenError):
                await auth_service.refresh(login.refresh_token)
        assert await token_count(db, user.id) == 1

    @pytest.mark.asyncio
    async def test_owner_missing(self, auth_service, db):
        user = await auth_service.register("alice", "alice@example.com", PASSWORD)
        login = await auth_service.login("alice@example.com", PASSWORD)

        with patch.object(UserRepository, "find_by_id", AsyncMock(return_value=None)):
            with pytest.raises(UserNotFoundError):
                await auth_service.refresh(login.refresh_token)

        assert await token_count(db, user.id) == 1


class TestLogout:
    @pytest.mark.asyncio
    async def test_logout_revokes_only_that_session(self, auth_service, db):
        user = await auth_service.register("alice", "alice@example.com", PASSWORD)
        phone = await auth_service.login("alice@example.com", PASSWORD)
        laptop = await auth_service.login("alice@example.com", PASSWORD)

        await auth_service.logout(phone.refresh_token, user_id=user.id)

        with pytest.raises(InvalidRefreshTokenError):
            await auth_service.refresh(phone.refresh_token)
        assert await auth_service.refresh(laptop.refresh_token)

    @pytest.mark.asyncio
    async def test_logout_twice(self, auth_service):
        await auth_service.register("alice", "alice@example.com", PASSWORD)
        login = await auth_service.login("alice@example.com", PASSWORD)
        await auth_service.logout(login.refresh_token)

        with pytest.raises(InvalidRefreshTokenError):
            await auth_service.logout(login.refresh_token)

    @pytest.mark.asyncio
    async def test_logout_other_users_token(self, auth_service):
        await auth_service.register("alice", "alice@example.com", PASSWORD)
        bob = await auth_service.register("bob", "bob@example.com", PASSWORD)
        alice_login = await auth_service.login("alice@example.com", PASSWORD)

        with pytest.raises(InvalidRefreshTokenError):
            await auth_service.logout(alice_login.refresh_token, user_id=bob.id)
        assert await auth_service.refresh(alice_login.refresh_token)

    @pytest.mark.asyncio
    async def test_access_token_survives_logout(self, auth_service):
        """Access tokens are stateless and stay valid until they expire."""
        await auth_service.register("alice", "alice@example.com", PASSWORD)
        login = await auth_service.login("alice@example.com", PASSWORD)

        await auth_service.logout(login.refresh_token)

        assert auth_service.authenticate(login.access_token).email == "alice@example.com"

    @pytest.mark.asyncio
    async def test_logout_all_devices(self, auth_service, db):
        user = await auth_service.register("alice", "alice@example.com", PASSWORD)
        bob = await auth_service.register("bob", "bob@example.com", PASSWORD)
        for _ in range(3):
            await auth_service.login("alice@example.com", PASSWORD)
        await auth_service.login("bob@example.com", PASSWORD)

        assert await auth_service.logout_all_devices(user.id) == 3
        assert await auth_service.logout_all_devices(user.id) == 0
        assert await token_count(db, bob.id) == 1

    @pytest.mark.asyncio
    async def test_logout_all_requires_user(self, auth_service):
        with pytest.raises(ValidationError):
            await auth_service.logout_all_devices("")


class TestAuthenticate:
    def test_missing_token(self, auth_service):
        with pytest.raises(TokenRequiredError):
            auth_service.authenticate(None)

    def test_invalid_token(self, auth_service):
        with pytest.raises(InvalidTokenError):
            auth_service.authenticate("garbage")


@pytest.mark.asyncio
async def test_purge_expired_refresh_tokens(auth_service, db):
    user = await auth_service.register("alice", "alice@example.com", PASSWORD)
    await auth_service.login("alice@example.com", PASSWORD)
    stale = await auth_service.login("alice@example.com", PASSWORD)
    async with db.session() as session:
        await session.execute(
            update(RefreshTokenModel)
            .where(RefreshTokenModel.token == RefreshTokenRepository.hash_token(stale.refresh_token))
            .values(expires_at=datetime.now(timezone.utc) - timedelta(days=1))
        )
        await session.commit()

    assert await auth_service.purge_expired_refresh_tokens() == 1
    assert await token_count(db, user.id) == 1
