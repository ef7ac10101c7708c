from sqlalchemy.orm import Session

from health_index.models.health_index import HealthIndexRecord
from health_index.schemas.health_index import HealthIndexCreate, HealthIndexResponse


def record_health_index(db: Session, payload: HealthIndexCreate) -> HealthIndexRecord:
    record = HealthIndexRecord(
        overall_score=payload.overall_score,
        physical_score=payload.physical_score,
        blood_score=payload.blood_score,
        wellness_score=payload.wellness_score,
        source=payload.source,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


def latest_health_index(db: Session) -> HealthIndexRecord | None:
    return (
        db.query(HealthIndexRecord)
        .order_by(HealthIndexRecord.recorded_at.desc(), HealthIndexRecord.id.desc())
        .first()
    )


def to_response(record: HealthIndexRecord) -> HealthIndexResponse:
    return HealthIndexResponse(
        id=record.id,
        overall_score=record.overall_score,
        physical_score=record.physical_score,
        blood_score=record.blood_score,
        wellness_score=record.wellness_score,
        source=record.source,
        recorded_at=record.recorded_at.isoformat(),
    )
