"""Health check submission entity."""

from dataclasses import asdict, dataclass
from typing import Any

from gulita.core.exceptions import ValidationError

HEALTH_STATUSES = ("low", "medium", "high")
EDUCATION_LEVELS = ("elementary", "junior", "senior", "college")
DIABETES_RESULTS = ("non-diabetic", "diabetic")


@dataclass
class HealthCheckInput:
    """Answers to the diabetes risk questionnaire.

    Attributes:
        bmi: Body mass index.
        age: Age in years.
        income: Income bracket value.
        phys_hlth: Physical health rating (low/medium/high).
        education: Education level.
        gen_hlth: General health rating (low/medium/high).
        ment_hlth: Mental health rating (low/medium/high).
        diabetes_result: Known result, or None to request a prediction.
    """

    bmi: float
    age: int
    income: int
    phys_hlth: str
    education: str
    gen_hlth: str
    ment_hlth: str
    diabetes_result: str | None = None

    def __post_init__(self) -> None:
        """Validate questionnaire answers."""
        if self.bmi is None or self.bmi <= 0:
            raise ValidationError(details="bmi must be a positive number")
        if self.age is None or self.age < 1:
            raise ValidationError(details="age must be at least 1")
        if self.income is None or self.income < 0:
            raise ValidationError(details="income must not be negative")
        for name in ("phys_hlth", "gen_hlth", "ment_hlth"):
            if getattr(self, name) not in HEALTH_STATUSES:
                raise ValidationError(details=f"{name} must be one of: {', '.join(HEALTH_STATUSES)}")
        if self.education not in EDUCATION_LEVELS:
            raise ValidationError(details=f"education must be one of: {', '.join(EDUCATION_LEVELS)}")
        if self.diabetes_result is not None and self.diabetes_result not in DIABETES_RESULTS:
            raise ValidationError(
                details=f"diabetes_result must be one of: {', '.join(DIABETES_RESULTS)}"
            )

    def features(self) -> dict[str, Any]:
        """Questionnaire answers without the result, as sent for prediction."""
        data = asdict(self)
        data.pop("diabetes_result")
        return data
