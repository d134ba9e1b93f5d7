"""Pydantic schemas for profile endpoints."""

from pydantic import BaseModel, EmailStr, Field

from gulita.infrastructure.api.schemas.auth_schemas import USERNAME_PATTERN


class UpdateProfileRequest(BaseModel):
    """Request body for a profile update. At least one field is required."""

    username: str | None = Field(
        None,
        min_length=3,
        max_length=30,
        pattern=USERNAME_PATTERN,
        description="New username",
    )
    email: EmailStr | None = Field(None, description="New email address")


class ChangePasswordRequest(BaseModel):
    """Request body for a password change."""

    current_password: str = Field(..., min_length=1, description="Password currently set")
    new_password: str = Field(..., min_length=1, max_length=128, description="Replacement password")


class ChangePasswordData(BaseModel):
    sessions_revoked: int = Field(..., description="Refresh tokens revoked by the change")
