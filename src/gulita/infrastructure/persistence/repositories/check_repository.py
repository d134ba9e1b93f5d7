"""Repository for diabetes risk check results."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from gulita.infrastructure.persistence.errors import translate_connection_errors
from gulita.infrastructure.persistence.models import CheckResultModel


class CheckRepository:
    """Repository for check result database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @translate_connection_errors
    async def create(self, check: CheckResultModel) -> CheckResultModel:
        self.session.add(check)
        await self.session.flush()
        return check

    @translate_connection_errors
    async def find_by_id(self, check_id: str) -> CheckResultModel | None:
        result = await self.session.execute(
            select(CheckResultModel).where(CheckResultModel.id == check_id)
        )
        return result.scalar_one_or_none()

    @translate_connection_errors
    async def list_for_user(self, user_id: str) -> list[CheckResultModel]:
        """List a user's check results, newest first."""
        result = await self.session.execute(
            select(CheckResultModel)
            .where(CheckResultModel.user_id == user_id)
            .order_by(CheckResultModel.created_at.desc(), CheckResultModel.id)
        )
        return list(result.scalars().all())

    @translate_connection_errors
    async def delete(self, check_id: str) -> bool:
        result = await self.session.execute(
            delete(CheckResultModel).where(CheckResultModel.id == check_id)
        )
        return result.rowcount > 0
