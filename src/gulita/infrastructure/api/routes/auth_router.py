"""Authentication API routes.

Provides endpoints for registration, login, refresh token rotation and logout.
"""

from fastapi import APIRouter, status

from gulita.core.logging import get_logger
from gulita.infrastructure.api.dependencies import AuthServiceDep, CurrentUser
from gulita.infrastructure.api.schemas import (
    ApiResponse,
    ErrorResponse,
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

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[UserData],
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        409: {"model": ErrorResponse, "description": "Email or username already exists"},
    },
)
async def register(request: RegisterRequest, auth_service: AuthServiceDep) -> ApiResponse[UserData]:
    """Register a new user.

    The new user must log in to obtain tokens.
    """
    user = await auth_service.register(request.username, request.email, request.password)
    return ApiResponse[UserData](
        message="User registered successfully",
        data=UserData(user=UserResponse.model_validate(user)),
    )


@router.post(
    "/login",
    response_model=ApiResponse[LoginData],
    responses={
        401: {"model": ErrorResponse, "description": "Invalid email or password"},
        404: {"model": ErrorResponse, "description": "No user with this email"},
    },
)
async def login(request: LoginRequest, auth_service: AuthServiceDep) -> ApiResponse[LoginData]:
    """Authenticate with email and password.

    Returns a short-lived access token and a refresh token for this device.
    """
    result = await auth_service.login(request.email, request.password)
    return ApiResponse[LoginData](
        message="Login successful",
        data=LoginData(
            user=UserResponse.model_validate(result.user),
            access_token=result.access_token,
            refresh_token=result.refresh_token,
            expires_in=result.expires_in,
        ),
    )


@router.post(
    "/refresh",
    response_model=ApiResponse[TokenData],
    responses={
        401: {"model": ErrorResponse, "description": "Invalid, expired or already used refresh token"},
    },
)
async def refresh(request: RefreshRequest, auth_service: AuthServiceDep) -> ApiResponse[TokenData]:
    """Exchange a refresh token for a new token pair.

    The presented refresh token is consumed and cannot be used again.
    """
    tokens = await auth_service.refresh(request.refresh_token)
    return ApiResponse[TokenData](
        message="Token refreshed successfully",
        data=TokenData(
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            expires_in=tokens.expires_in,
        ),
    )


@router.post(
    "/logout",
    response_model=ApiResponse[None],
    responses={
        401: {"model": ErrorResponse, "description": "Not authenticated or unknown refresh token"},
    },
)
async def logout(
    request: LogoutRequest,
    current_user: CurrentUser,
    auth_service: AuthServiceDep,
) -> ApiResponse[None]:
    """End the session bound to one refresh token."""
    await auth_service.logout(request.refresh_token, user_id=current_user.id)
    return ApiResponse[None](message="Logout successful")


@router.post(
    "/logout-all",
    response_model=ApiResponse[LogoutAllData],
    responses={401: {"model": ErrorResponse, "description": "Not authenticated"}},
)
async def logout_all(current_user: CurrentUser, auth_service: AuthServiceDep) -> ApiResponse[LogoutAllData]:
    """End every session of the current user."""
    revoked = await auth_service.logout_all_devices(current_user.id)
    return ApiResponse[LogoutAllData](
        message="Logged out from all devices",
        data=LogoutAllData(revoked=revoked),
    )
