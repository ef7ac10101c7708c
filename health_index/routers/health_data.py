from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from health_index.database import get_db
from health_index.routers.deps import get_health_data_provider
from health_index.schemas.health_data import HealthDataResponse
from health_index.services.health_data import HealthDataProvider, annotate_snapshot, fetch_latest

router = APIRouter(prefix="/api/health-data", tags=["health-data"])


@router.get("/latest", response_model=HealthDataResponse)
async def latest(
    db: Session = Depends(get_db),
    provider: HealthDataProvider = Depends(get_health_data_provider),
):
    snapshot = await fetch_latest(provider)
    return annotate_snapshot(db, snapshot)
