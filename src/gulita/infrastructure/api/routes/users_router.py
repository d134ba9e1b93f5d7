"""Profile API routes for the authenticated user."""

from fastapi import APIRouter

from gulita.infrastructure.api.dependencies import CurrentUser, UserServiceDep
from gulita.infrastructure.api.schemas import (
    ApiResponse,
    ChangePasswordData,
    ChangePasswordRequest,
    ErrorResponse,
    UpdateProfileRequest,
    UserData,
    UserResponse,
)

router = APIRouter()


@router.get(
    "/profile",
    response_model=ApiResponse[UserData],
    responses={
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "User no longer exists"},
    },
)
async def get_profile(current_user: CurrentUser, user_service: UserServiceDep) -> ApiResponse[UserData]:
    """Get the current user's profile."""
    user = await user_service.get_profile(current_user.id)
    return ApiResponse[UserData](
        message="Profile retrieved successfully",
        data=UserData(user=UserResponse.model_validate(user)),
    )


@router.put(
    "/profile",
    response_model=ApiResponse[UserData],
    responses={
        400: {"model": ErrorResponse, "description": "Nothing to update"},
        409: {"model": ErrorResponse, "description": "Email or username already exists"},
    },
)
async def update_profile(
    request: UpdateProfileRequest,
    current_user: CurrentUser,
    user_service: UserServiceDep,
) -> ApiResponse[UserData]:
    """Change the current user's username and/or email."""
    user = await user_service.update_profile(
        current_user.id,
        username=request.username,
        email=request.email,
    )
    return ApiResponse[UserData](
        message="Profile updated successfully",
        data=UserData(user=UserResponse.model_validate(user)),
    )


@router.put(
    "/change-password",
    response_model=ApiResponse[ChangePasswordData],
    responses={
        400: {"model": ErrorResponse, "description": "New password rejected"},
        401: {"model": ErrorResponse, "description": "Current password is incorrect"},
    },
)
async def change_password(
    request: ChangePasswordRequest,
    current_user: CurrentUser,
    user_service: UserServiceDep,
) -> ApiResponse[ChangePasswordData]:
    """Change the current user's password.

    Every refresh token of the user is revoked, so all devices must log in again.
    """
    revoked = await user_service.change_password(
        current_user.id,
        request.current_password,
        request.new_password,
    )
    return ApiResponse[ChangePasswordData](
        message="Password changed successfully",
        data=ChangePasswordData(sessions_revoked=revoked),
    )
