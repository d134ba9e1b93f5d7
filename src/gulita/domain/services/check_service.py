"""Health check service.

Stores diabetes risk questionnaires for a user, optionally scoring them with
the prediction service.
"""

from gulita.core.exceptions import CheckNotFoundError, ForbiddenError, ValidationError
from gulita.core.logging import get_logger
from gulita.domain.entities.check import HealthCheckInput
from gulita.infrastructure.persistence.database import SessionScope
from gulita.infrastructure.persistence.models import CheckResultModel
from gulita.infrastructure.persistence.repositories import CheckRepository
from gulita.infrastructure.services.prediction_client import PredictionClient

logger = get_logger(__name__)


class CheckService:
    """Service for a user's health check history."""

    def __init__(
        self,
        session_scope: SessionScope,
        prediction_client: PredictionClient | None = None,
    ) -> None:
        """Initialize the check service.

        Args:
            session_scope: Factory for one unit of work.
            prediction_client: Scores checks submitted without a result.
                               When None, the result is mandatory.
        """
        self._session_scope = session_scope
        self.prediction_client = prediction_client

    async def get_history(self, user_id: str) -> list[CheckResultModel]:
        """List a user's checks, newest first.

        Raises:
            ValidationError: If user_id is missing.
        """
        if not user_id:
            raise ValidationError(details="User ID is required to fetch history")

        async with self._session_scope() as session:
            return await CheckRepository(session).list_for_user(user_id)

    async def create_check(self, user_id: str, check: HealthCheckInput) -> CheckResultModel:
        """Record a questionnaire for a user.

        Args:
            user_id: Owner of the record.
            check: Questionnaire answers.

        Returns:
            The stored record.

        Raises:
            ValidationError: If user_id is missing, or the result is missing
                             and no prediction service is configured.
            ServiceUnavailableError: If the prediction service fails.
        """
        if not user_id:
            raise ValidationError(details="User ID is required")

        diabetes_result = check.diabetes_result
        if diabetes_result is None:
            if self.prediction_client is None:
                raise ValidationError(details="Missing required field: diabetes_result")
            diabetes_result = await self.prediction_client.predict(check.features())
            logger.info("Check scored by prediction service", user_id=user_id, result=diabetes_result)

        async with self._session_scope() as session:
            record = CheckResultModel(
                user_id=user_id,
                diabetes_result=diabetes_result,
                **check.features(),
            )
            await CheckRepository(session).create(record)
            await session.commit()

        logger.info("Health check recorded", user_id=user_id, check_id=record.id)
        return record

    async def delete_check(self, user_id: str, check_id: str) -> None:
        """Delete one of the user's own checks.

        Raises:
            CheckNotFoundError: If the record does not exist.
            ForbiddenError: If the record belongs to another user.
        """
        async with self._session_scope() as session:
            repo = CheckRepository(session)
            record = await repo.find_by_id(check_id)
            if record is None:
                raise CheckNotFoundError()
            if record.user_id != user_id:
                logger.warning("Check deletion forbidden", user_id=user_id, check_id=check_id)
                raise ForbiddenError()

            await repo.delete(check_id)
            await session.commit()

        logger.info("Health check deleted", user_id=user_id, check_id=check_id)
