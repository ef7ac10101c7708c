from health_index.models.biomarker import BiomarkerCategory, BiomarkerDefinition, ScoreWeight
from health_index.models.data_source import DataSource
from health_index.models.health_index import HealthIndexRecord

__all__ = [
    "BiomarkerCategory",
    "BiomarkerDefinition",
    "ScoreWeight",
    "DataSource",
    "HealthIndexRecord",
]
