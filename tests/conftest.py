"""Pytest configuration for all tests."""

import os

# Settings are cached on first use, so the environment is prepared before
# any gulita module is imported.
os.environ["GULITA_ENVIRONMENT"] = "testing"
os.environ["GULITA_JWT_SECRET"] = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["GULITA_DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["GULITA_PASSWORD_HASH_TIME_COST"] = "1"
os.environ["GULITA_PASSWORD_HASH_MEMORY_COST"] = "8"
os.environ["GULITA_PASSWORD_HASH_PARALLELISM"] = "1"
os.environ.pop("GULITA_PREDICTION_URL", None)

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from gulita.infrastructure.api.app import create_app
from gulita.infrastructure.api.container import ServiceContainer, build_services
from gulita.infrastructure.auth import JWTService
from gulita.infrastructure.persistence import DatabaseManager

TEST_PASSWORD = "Password123!"


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory SQLite engine shared by every session of one test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[DatabaseManager, None]:
    """Database manager over the test engine with all tables created."""
    manager = DatabaseManager(engine=engine)
    await manager.create_tables()
    yield manager
    await manager.drop_tables()


@pytest.fixture
def session_scope(db: DatabaseManager):
    return db.session


@pytest.fixture
def jwt_service() -> JWTService:
    return JWTService()


@pytest.fixture
def services(db: DatabaseManager) -> ServiceContainer:
    return build_services(db)


@pytest_asyncio.fixture
async def client(services: ServiceContainer) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client wired to an app that uses the test services."""
    app = create_app(services=services)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def registered_user(services: ServiceContainer):
    """A user registered with ``TEST_PASSWORD``."""
    return await services.auth.register("alice", "alice@example.com", TEST_PASSWORD)


@pytest_asyncio.fixture
async def login_result(services: ServiceContainer, registered_user):
    return await services.auth.login("alice@example.com", TEST_PASSWORD)


@pytest.fixture
def auth_headers(login_result) -> dict[str, str]:
    return {"Authorization": f"Bearer {login_result.access_token}"}
