"""FastAPI dependencies for services and authentication.

Provides the shared services and extracts the current user from the
Bearer token in the Authorization header.
"""

from typing import Annotated

from fastapi import Depends, Header, Request

from gulita.core.exceptions import InvalidTokenError, TokenRequiredError
from gulita.core.logging import get_logger
from gulita.domain.entities import AuthenticatedUser
from gulita.domain.services import AuthService, BlogService, CheckService, UserService
from gulita.infrastructure.api.container import ServiceContainer

logger = get_logger(__name__)


def get_services(request: Request) -> ServiceContainer:
    """Get the service container attached to the application."""
    return request.app.state.services


def get_auth_service(services: Annotated[ServiceContainer, Depends(get_services)]) -> AuthService:
    return services.auth


def get_user_service(services: Annotated[ServiceContainer, Depends(get_services)]) -> UserService:
    return services.users


def get_blog_service(services: Annotated[ServiceContainer, Depends(get_services)]) -> BlogService:
    return services.blogs


def get_check_service(services: Annotated[ServiceContainer, Depends(get_services)]) -> CheckService:
    return services.checks


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
BlogServiceDep = Annotated[BlogService, Depends(get_blog_service)]
CheckServiceDep = Annotated[CheckService, Depends(get_check_service)]


async def get_current_user(
    auth_service: AuthServiceDep,
    authorization: Annotated[str | None, Header()] = None,
) -> AuthenticatedUser:
    """Extract and validate the current user from the Authorization header.

    Args:
        auth_service: Service that verifies access tokens.
        authorization: The Authorization header value (e.g., "Bearer <token>").

    Returns:
        AuthenticatedUser: The identity carried by the token.

    Raises:
        TokenRequiredError: If the header is missing.
        InvalidTokenError: If the header is malformed or the token is invalid.
        TokenExpiredError: If the token has expired.
    """
    if not authorization:
        logger.info("Authentication failed: missing Authorization header")
        raise TokenRequiredError()

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.info("Authentication failed: invalid Authorization header format")
        raise InvalidTokenError()

    return auth_service.authenticate(parts[1])


CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]
