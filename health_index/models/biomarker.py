from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from health_index.database import Base


class BiomarkerCategory(Base):
    __tablename__ = "biomarker_categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, index=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    biomarkers = relationship(
        "BiomarkerDefinition",
        back_populates="category",
        cascade="all, delete-orphan",
        order_by="BiomarkerDefinition.id",
    )


class BiomarkerDefinition(Base):
    __tablename__ = "biomarker_definitions"
    __table_args__ = (
        CheckConstraint("normal_range_min <= normal_range_max", name="ck_biomarker_definitions_normal_range"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    category_id: Mapped[int] = mapped_column(
        ForeignKey("biomarker_categories.id", ondelete="CASCADE"), index=True, nullable=False
    )
    code: Mapped[str] = mapped_column(String(32), unique=True, index=True, nullable=False)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    unit: Mapped[str] = mapped_column(String(50), nullable=False)
    is_dependent: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    normal_range_min: Mapped[float] = mapped_column(Float, nullable=False)
    normal_range_max: Mapped[float] = mapped_column(Float, nullable=False)
    aliases: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    category = relationship("BiomarkerCategory", back_populates="biomarkers")
    score_weight = relationship(
        "ScoreWeight", back_populates="biomarker", uselist=False, cascade="all, delete-orphan"
    )

    def is_within_normal_range(self, value: float) -> bool:
        return self.normal_range_min <= value <= self.normal_range_max


class ScoreWeight(Base):
    __tablename__ = "score_weights"
    __table_args__ = (
        CheckConstraint("weight >= 0 AND weight <= 1", name="ck_score_weights_weight_unit_interval"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    biomarker_id: Mapped[int] = mapped_column(
        ForeignKey("biomarker_definitions.id", ondelete="CASCADE"), unique=True, index=True, nullable=False
    )
    weight: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    biomarker = relationship("BiomarkerDefinition", back_populates="score_weight")
