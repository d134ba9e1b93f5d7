"""Unit tests for the health check input entity."""

import pytest

from gulita.core.exceptions import ValidationError
from gulita.domain.entities import HealthCheckInput

VALID = {
    "bmi": 24.5,
    "age": 40,
    "income": 5,
    "phys_hlth": "low",
    "education": "college",
    "gen_hlth": "medium",
    "ment_hlth": "high",
}


def test_features_exclude_result():
    check = HealthCheckInput(**VALID, diabetes_result="diabetic")

    assert check.features() == VALID


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("bmi", 0),
        ("age", 0),
        ("income", -1),
        ("phys_hlth", "extreme"),
        ("education", "phd"),
        ("ment_hlth", None),
    ],
)
def test_invalid_answers(field, value):
    with pytest.raises(ValidationError):
        HealthCheckInput(**{**VALID, field: value})


def test_invalid_result():
    with pytest.raises(ValidationError):
        HealthCheckInput(**VALID, diabetes_result="maybe")
