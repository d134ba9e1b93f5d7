"""API route modules."""

from gulita.infrastructure.api.routes.auth_router import router as auth_router
from gulita.infrastructure.api.routes.blogs_router import router as blogs_router
from gulita.infrastructure.api.routes.checks_router import router as checks_router
from gulita.infrastructure.api.routes.users_router import router as users_router

__all__ = ["auth_router", "blogs_router", "checks_router", "users_router"]
