from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from health_index.database import Base


class HealthIndexRecord(Base):
    """An externally supplied health index value, optionally split by category."""

    __tablename__ = "health_index_records"
    __table_args__ = (
        CheckConstraint("overall_score >= 0 AND overall_score <= 100", name="ck_health_index_records_overall"),
        CheckConstraint("physical_score >= 0 AND physical_score <= 100", name="ck_health_index_records_physical"),
        CheckConstraint("blood_score >= 0 AND blood_score <= 100", name="ck_health_index_records_blood"),
        CheckConstraint("wellness_score >= 0 AND wellness_score <= 100", name="ck_health_index_records_wellness"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    overall_score: Mapped[float] = mapped_column(Float, nullable=False)
    physical_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    blood_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    wellness_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    source: Mapped[str | None] = mapped_column(String(100), nullable=True)
    recorded_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True, nullable=False)
