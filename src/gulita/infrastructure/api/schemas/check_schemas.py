"""Pydantic schemas for health check endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

HealthStatus = Literal["low", "medium", "high"]
EducationLevel = Literal["elementary", "junior", "senior", "college"]
DiabetesResult = Literal["non-diabetic", "diabetic"]


class CheckCreateRequest(BaseModel):
    """Questionnaire answers for a new health check."""

    bmi: float = Field(..., gt=0, description="Body Mass Index")
    age: int = Field(..., ge=1, description="User age")
    income: int = Field(..., ge=0, description="User income")
    phys_hlth: HealthStatus = Field(..., description="Physical health status")
    education: EducationLevel = Field(..., description="Education level")
    gen_hlth: HealthStatus = Field(..., description="General health status")
    ment_hlth: HealthStatus = Field(..., description="Mental health status")
    diabetes_result: DiabetesResult | None = Field(
        None,
        description="Known result; predicted by the inference service when omitted",
    )


class CheckResponse(BaseModel):
    """A stored health check."""

    id: str
    user_id: str
    bmi: float
    age: int
    income: int
    phys_hlth: str
    education: str
    gen_hlth: str
    ment_hlth: str
    diabetes_result: str
    created_at: datetime

    model_config = {"from_attributes": True}


class CheckData(BaseModel):
    check: CheckResponse


class CheckHistoryData(BaseModel):
    history: list[CheckResponse]
