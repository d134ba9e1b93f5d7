"""SQLAlchemy model for diabetes risk check results."""

import uuid
from datetime import datetime

from sqlalchemy import Enum, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gulita.domain.entities.check import DIABETES_RESULTS, EDUCATION_LEVELS, HEALTH_STATUSES
from gulita.infrastructure.persistence.database import Base
from gulita.infrastructure.persistence.types import UTCDateTime, utcnow

health_status = Enum(*HEALTH_STATUSES, name="health_status")


class CheckResultModel(Base):
    """One submitted health questionnaire and its diabetes result."""

    __tablename__ = "check_results"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    bmi: Mapped[float] = mapped_column(Float, nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    income: Mapped[int] = mapped_column(Integer, nullable=False)
    phys_hlth: Mapped[str] = mapped_column(
        health_status, nullable=False
    )
    education: Mapped[str] = mapped_column(
        Enum(*EDUCATION_LEVELS, name="education_level"), nullable=False
    )
    gen_hlth: Mapped[str] = mapped_column(
        health_status, nullable=False
    )
    ment_hlth: Mapped[str] = mapped_column(
        health_status, nullable=False
    )
    diabetes_result: Mapped[str] = mapped_column(
        Enum(*DIABETES_RESULTS, name="diabetes_risk"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)

    user = relationship("UserModel", back_populates="check_results")

    def __repr__(self) -> str:
        return f"<CheckResultModel(id={self.id}, user_id={self.user_id}, result={self.diabetes_result})>"
