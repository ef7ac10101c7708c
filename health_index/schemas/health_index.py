from pydantic import BaseModel, Field


class HealthIndexCreate(BaseModel):
    """Health index value computed elsewhere and handed to the service as-is."""
    overall_score: float = Field(ge=0, le=100, description="Overall health index on a 0-100 scale")
    physical_score: float | None = Field(default=None, ge=0, le=100, description="Physical category score")
    blood_score: float | None = Field(default=None, ge=0, le=100, description="Blood category score")
    wellness_score: float | None = Field(default=None, ge=0, le=100, description="Wellness category score")
    source: str | None = Field(default=None, max_length=100, description="Who or what produced the value")


class HealthIndexResponse(BaseModel):
    id: int
    overall_score: float
    physical_score: float | None
    blood_score: float | None
    wellness_score: float | None
    source: str | None
    recorded_at: str
