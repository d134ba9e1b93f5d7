"""Pydantic request and response schemas."""

from gulita.infrastructure.api.schemas.auth_schemas import (
    LoginData,
    LoginRequest,
    LogoutAllData,
    LogoutRequest,
    RefreshRequest,
    RegisterRequest,
    TokenData,
    UserData,
    UserResponse,
)
from gulita.infrastructure.api.schemas.blog_schemas import (
    BlogCreateRequest,
    BlogData,
    BlogListData,
    BlogResponse,
    BlogUpdateRequest,
    PaginationResponse,
)
from gulita.infrastructure.api.schemas.check_schemas import (
    CheckCreateRequest,
    CheckData,
    CheckHistoryData,
    CheckResponse,
)
from gulita.infrastructure.api.schemas.common_schemas import (
    ApiResponse,
    ErrorResponse,
    ValidationErrorDetail,
)
from gulita.infrastructure.api.schemas.user_schemas import (
    ChangePasswordData,
    ChangePasswordRequest,
    UpdateProfileRequest,
)

__all__ = [
    "ApiResponse",
    "BlogCreateRequest",
    "BlogData",
    "BlogListData",
    "BlogResponse",
    "BlogUpdateRequest",
    "ChangePasswordData",
    "ChangePasswordRequest",
    "CheckCreateRequest",
    "CheckData",
    "CheckHistoryData",
    "CheckResponse",
    "ErrorResponse",
    "LoginData",
    "LoginRequest",
    "LogoutAllData",
    "LogoutRequest",
    "PaginationResponse",
    "RefreshRequest",
    "RegisterRequest",
    "TokenData",
    "UpdateProfileRequest",
    "UserData",
    "UserResponse",
    "ValidationErrorDetail",
]
