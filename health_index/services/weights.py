import logging
import math

from sqlalchemy.orm import Session

from health_index.models.biomarker import BiomarkerCategory, BiomarkerDefinition, ScoreWeight
from health_index.schemas.taxonomy import WeightItem, WeightSummary

logger = logging.getLogger(__name__)

DEFAULT_WEIGHT = 0.05

WEIGHTS_BY_CODE: dict[str, float] = {
    "BMI": 0.15,
    "GLUC": 0.15,
    "HDL": 0.15,
    "WHR": 0.10,
    "RHR": 0.10,
    "STEPS": 0.20,
    "ACTIVE": 0.20,
    "DIET": 0.10,
}

WEIGHT_TOTAL_TOLERANCE = 1e-9


def weight_for_code(code: str) -> float:
    """Return the fixed score weight for a biomarker code.

    Codes are matched exactly; anything not in the table gets ``DEFAULT_WEIGHT``.
    """
    return WEIGHTS_BY_CODE.get(code, DEFAULT_WEIGHT)


def is_balanced(total: float) -> bool:
    return math.isclose(total, 1.0, rel_tol=0.0, abs_tol=WEIGHT_TOTAL_TOLERANCE)


def summarize_weights(db: Session) -> WeightSummary:
    rows = (
        db.query(ScoreWeight, BiomarkerDefinition, BiomarkerCategory)
        .join(BiomarkerDefinition, ScoreWeight.biomarker_id == BiomarkerDefinition.id)
        .join(BiomarkerCategory, BiomarkerDefinition.category_id == BiomarkerCategory.id)
        .order_by(BiomarkerCategory.id.asc(), BiomarkerDefinition.id.asc())
        .all()
    )
    items = [
        WeightItem(code=biomarker.code, category=category.name, weight=weight.weight)
        for weight, biomarker, category in rows
    ]
    total = math.fsum(item.weight for item in items)
    return WeightSummary(weights=items, total=round(total, 10), balanced=is_balanced(total))


def warn_if_unbalanced(db: Session) -> WeightSummary:
    summary = summarize_weights(db)
    if summary.weights and not summary.balanced:
        logger.warning("Score weights sum to %s instead of 1.0 across %d biomarkers", summary.total, len(summary.weights))
    return summary
