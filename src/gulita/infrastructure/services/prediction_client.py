"""Client for the diabetes prediction endpoint.

The endpoint receives the questionnaire answers as JSON and answers with
``{"prediction": ...}`` where the value is ``1``/``0`` or the result label.
"""

from typing import Any

import httpx

from gulita.core.config import Settings
from gulita.core.exceptions import ServiceUnavailableError
from gulita.core.logging import get_logger

logger = get_logger(__name__)

_DIABETIC = {1, "1", "diabetic"}
_NON_DIABETIC = {0, "0", "non-diabetic"}


class PredictionClient:
    """Asks the inference service for a diabetes result."""

    def __init__(self, url: str, timeout: float = 10.0) -> None:
        """Initialize the client.

        Args:
            url: Full URL of the prediction endpoint.
            timeout: Request timeout in seconds.
        """
        self.url = url
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "PredictionClient | None":
        """Build a client when a prediction URL is configured."""
        if not settings.prediction_url:
            return None
        return cls(settings.prediction_url, timeout=settings.prediction_timeout_seconds)

    async def predict(self, features: dict[str, Any]) -> str:
        """Get a diabetes result for a questionnaire.

        Args:
            features: Questionnaire answers.

        Returns:
            ``"diabetic"`` or ``"non-diabetic"``.

        Raises:
            ServiceUnavailableError: If the service is unreachable or answers
                                     with an error or an unexpected body.
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.url, json=features)
        except httpx.HTTPError as e:
            logger.error("Prediction request failed", url=self.url, error=str(e))
            raise ServiceUnavailableError("Prediction service is unavailable") from e

        if not response.is_success:
            logger.error("Prediction service returned an error", status_code=response.status_code)
            raise ServiceUnavailableError("Prediction service is unavailable")

        try:
            data = response.json()
        except ValueError as e:
            raise ServiceUnavailableError("Prediction service returned an invalid response") from e

        return self._parse(data)

    @staticmethod
    def _parse(data: Any) -> str:
        value = data.get("prediction") if isinstance(data, dict) else None
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        if isinstance(value, str):
            value = value.strip().lower()
        if isinstance(value, bool):
            value = int(value)

        if isinstance(value, (int, str)):
            if value in _DIABETIC:
                return "diabetic"
            if value in _NON_DIABETIC:
                return "non-diabetic"
        logger.error("Unexpected prediction payload", payload=data)
        raise ServiceUnavailableError("Prediction service returned an invalid response")
