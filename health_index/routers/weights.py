from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from health_index.database import get_db
from health_index.schemas.taxonomy import WeightLookup, WeightSummary
from health_index.services.weights import summarize_weights, weight_for_code

router = APIRouter(prefix="/api/weights", tags=["weights"])


@router.get("", response_model=WeightSummary)
def weight_summary(db: Session = Depends(get_db)):
    return summarize_weights(db)


@router.get("/{code}", response_model=WeightLookup)
def weight_lookup(code: str):
    return WeightLookup(code=code, weight=weight_for_code(code))
