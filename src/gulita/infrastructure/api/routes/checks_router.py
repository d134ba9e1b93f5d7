"""Health check API routes.

Every route acts on the authenticated user's own records.
"""

from fastapi import APIRouter, status

from gulita.domain.entities import HealthCheckInput
from gulita.infrastructure.api.dependencies import CheckServiceDep, CurrentUser
from gulita.infrastructure.api.schemas import (
    ApiResponse,
    CheckCreateRequest,
    CheckData,
    CheckHistoryData,
    CheckResponse,
    ErrorResponse,
)

router = APIRouter()


@router.get("", response_model=ApiResponse[CheckHistoryData])
async def get_history(current_user: CurrentUser, check_service: CheckServiceDep) -> ApiResponse[CheckHistoryData]:
    """List the current user's checks, newest first."""
    history = await check_service.get_history(current_user.id)
    return ApiResponse[CheckHistoryData](
        message="Check history retrieved successfully",
        data=CheckHistoryData(history=[CheckResponse.model_validate(record) for record in history]),
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[CheckData],
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        503: {"model": ErrorResponse, "description": "Prediction service unavailable"},
    },
)
async def create_check(
    request: CheckCreateRequest,
    current_user: CurrentUser,
    check_service: CheckServiceDep,
) -> ApiResponse[CheckData]:
    """Record a questionnaire.

    When ``diabetes_result`` is omitted it is predicted by the inference service.
    """
    record = await check_service.create_check(
        current_user.id,
        HealthCheckInput(**request.model_dump()),
    )
    return ApiResponse[CheckData](
        message="Health check recorded successfully",
        data=CheckData(check=CheckResponse.model_validate(record)),
    )


@router.delete(
    "/{check_id}",
    response_model=ApiResponse[None],
    responses={
        403: {"model": ErrorResponse, "description": "Record belongs to another user"},
        404: {"model": ErrorResponse, "description": "Record not found"},
    },
)
async def delete_check(
    check_id: str,
    current_user: CurrentUser,
    check_service: CheckServiceDep,
) -> ApiResponse[None]:
    """Delete one of the current user's checks."""
    await check_service.delete_check(current_user.id, check_id)
    return ApiResponse[None](message="Health check deleted successfully")
