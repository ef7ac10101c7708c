from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from health_index.database import get_db
from health_index.schemas.health_index import HealthIndexCreate, HealthIndexResponse
from health_index.services.health_index import latest_health_index, record_health_index, to_response

router = APIRouter(prefix="/api/health-index", tags=["health-index"])


@router.post("", response_model=HealthIndexResponse)
def create(payload: HealthIndexCreate, db: Session = Depends(get_db)):
    return to_response(record_health_index(db, payload))


@router.get("/latest", response_model=HealthIndexResponse)
def latest(db: Session = Depends(get_db)):
    record = latest_health_index(db)
    if not record:
        raise HTTPException(status_code=404, detail="No health index has been recorded")
    return to_response(record)
