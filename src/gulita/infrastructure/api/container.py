"""Process-wide service wiring.

Services are built once at startup and shared by every request. Each
service opens its own database session per operation.
"""

from dataclasses import dataclass

from gulita.core.config import Settings, get_settings
from gulita.domain.services import AuthService, BlogService, CheckService, UserService
from gulita.infrastructure.auth import JWTService
from gulita.infrastructure.persistence import DatabaseManager
from gulita.infrastructure.services import PredictionClient


@dataclass
class ServiceContainer:
    """The services behind the HTTP API."""

    db: DatabaseManager
    jwt: JWTService
    auth: AuthService
    users: UserService
    blogs: BlogService
    checks: CheckService


def build_services(db: DatabaseManager, settings: Settings | None = None) -> ServiceContainer:
    """Wire the services on top of a database manager.

    Args:
        db: Database manager providing sessions.
        settings: Application settings. Defaults to the cached settings.

    Returns:
        ServiceContainer: Ready-to-use services.
    """
    settings = settings or get_settings()
    jwt_service = JWTService(settings)
    return ServiceContainer(
        db=db,
        jwt=jwt_service,
        auth=AuthService(db.session, jwt_service),
        users=UserService(db.session),
        blogs=BlogService(db.session),
        checks=CheckService(db.session, PredictionClient.from_settings(settings)),
    )
