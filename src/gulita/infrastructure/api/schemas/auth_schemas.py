"""Pydantic schemas for authentication endpoints."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from gulita.domain.entities.user import MIN_PASSWORD_LENGTH

USERNAME_PATTERN = r"^[A-Za-z0-9]+$"


class RegisterRequest(BaseModel):
    """Request body for user registration."""

    username: str = Field(
        ...,
        min_length=3,
        max_length=30,
        pattern=USERNAME_PATTERN,
        description="Alphanumeric username",
    )
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(
        ...,
        min_length=MIN_PASSWORD_LENGTH,
        max_length=128,
        description="User's password",
    )


class LoginRequest(BaseModel):
    """Request body for login."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")


class RefreshRequest(BaseModel):
    """Request body for refresh token rotation."""

    refresh_token: str = Field(..., min_length=1, description="Refresh token from login or last refresh")


class LogoutRequest(BaseModel):
    """Request body for logout."""

    refresh_token: str = Field(..., min_length=1, description="Refresh token to revoke")


class UserResponse(BaseModel):
    """Public user information."""

    id: str = Field(..., description="User ID")
    username: str = Field(..., description="Username")
    email: str = Field(..., description="User's email address")
    created_at: datetime | None = Field(None, description="When the user was created")
    updated_at: datetime | None = Field(None, description="When the user was last updated")

    model_config = {"from_attributes": True}


class UserData(BaseModel):
    user: UserResponse


class TokenData(BaseModel):
    """Newly issued tokens."""

    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="Opaque refresh token")
    token_type: str = Field("Bearer", description="Authorization scheme for the access token")
    expires_in: int = Field(..., description="Access token expiration time in seconds")


class LoginData(TokenData):
    """Tokens plus the authenticated user."""

    user: UserResponse


class LogoutAllData(BaseModel):
    revoked: int = Field(..., description="Number of sessions ended")
