from pydantic import BaseModel


class HealthDataSnapshot(BaseModel):
    authorized: bool
    steps: float = 0.0
    heart_rate: float = 0.0
    active_energy: float = 0.0


class HealthDataReading(BaseModel):
    metric: str
    value: float
    biomarker_code: str | None
    unit: str | None
    within_normal_range: bool | None


class HealthDataResponse(BaseModel):
    authorized: bool
    readings: list[HealthDataReading]
