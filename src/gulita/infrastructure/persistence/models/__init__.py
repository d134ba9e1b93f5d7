"""SQLAlchemy models.

Importing this package registers every table with ``Base.metadata``.
"""

from gulita.infrastructure.persistence.models.blog import BlogModel
from gulita.infrastructure.persistence.models.check_result import CheckResultModel
from gulita.infrastructure.persistence.models.refresh_token import RefreshTokenModel
from gulita.infrastructure.persistence.models.user import UserModel

__all__ = [
    "BlogModel",
    "CheckResultModel",
    "RefreshTokenModel",
    "UserModel",
]
