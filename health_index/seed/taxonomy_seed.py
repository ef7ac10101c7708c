import json
import logging
from typing import NamedTuple

from sqlalchemy.orm import Session, sessionmaker

from health_index.database import SessionLocal, session_scope
from health_index.models.biomarker import BiomarkerCategory, BiomarkerDefinition, ScoreWeight
from health_index.models.data_source import DataSource
from health_index.services.weights import warn_if_unbalanced, weight_for_code

logger = logging.getLogger(__name__)


class TaxonomySeedError(RuntimeError):
    pass


class CategorySeed(NamedTuple):
    name: str
    description: str


class DataSourceSeed(NamedTuple):
    name: str
    organization: str
    description: str


class BiomarkerSeed(NamedTuple):
    category: str
    code: str
    display_name: str
    unit: str
    is_dependent: bool
    normal_range_min: float
    normal_range_max: float
    aliases: tuple[str, ...] = ()


CATEGORIES = [
    CategorySeed("Physical", "Biomarkers from yearly checkups"),
    CategorySeed("Blood", "Biomarkers from lab tests"),
    CategorySeed("Wellness", "Biomarkers from Apple Watch and daily habits"),
]

DATA_SOURCES = [
    DataSourceSeed("appleWatch", "Apple", "Apple Watch data"),
    DataSourceSeed("lab", "Quest Diagnostics", "Lab test results"),
    DataSourceSeed("checkup", "Annual Physical", "Yearly medical checkup"),
    DataSourceSeed("userInput", "User", "Manually entered data"),
]

BIOMARKERS = [
    BiomarkerSeed("Physical", "BMI", "Body Mass Index", "kg/m²", True, 18.5, 24.9, ("body mass index", "bodyMassIndex")),
    BiomarkerSeed("Physical", "WHR", "Waist-to-Hip Ratio", "ratio", True, 0.8, 0.9, ("waist hip ratio",)),
    BiomarkerSeed("Physical", "RHR", "Resting Heart Rate", "bpm", True, 60, 100, ("heartRate", "heart rate", "restingHeartRate")),
    BiomarkerSeed("Blood", "GLUC", "Fasting Glucose", "mg/dL", True, 70, 100, ("glucose", "blood glucose", "bloodGlucose")),
    BiomarkerSeed("Blood", "HDL", "HDL Cholesterol", "mg/dL", True, 40, 60, ("high density lipoprotein",)),
    BiomarkerSeed("Wellness", "STEPS", "Daily Steps", "count", False, 7000, 10000, ("stepCount", "steps")),
    BiomarkerSeed("Wellness", "ACTIVE", "Active Energy", "kcal", False, 300, 600, ("activeEnergyBurned", "active calories")),
    BiomarkerSeed("Wellness", "DIET", "Diet Quality", "score", False, 0, 100, ("diet score",)),
]


def _has_taxonomy(db: Session) -> bool:
    return db.query(BiomarkerCategory.id).first() is not None


def _fetch_category(db: Session, name: str, biomarker_code: str) -> BiomarkerCategory:
    category = db.query(BiomarkerCategory).filter(BiomarkerCategory.name == name).first()
    if category is None:
        raise TaxonomySeedError(f"Could not find category {name!r} for biomarker {biomarker_code!r}")
    return category


def _seed_categories(db: Session) -> None:
    for item in CATEGORIES:
        db.add(BiomarkerCategory(name=item.name, description=item.description))
    db.flush()


def _seed_data_sources(db: Session) -> None:
    for item in DATA_SOURCES:
        db.add(DataSource(name=item.name, organization=item.organization, description=item.description))


def _seed_biomarker_definitions(db: Session) -> None:
    for item in BIOMARKERS:
        if item.normal_range_min > item.normal_range_max:
            raise TaxonomySeedError(
                f"Biomarker {item.code!r} has normal range {item.normal_range_min}..{item.normal_range_max}"
            )
        category = _fetch_category(db, item.category, item.code)
        db.add(
            BiomarkerDefinition(
                category=category,
                code=item.code,
                display_name=item.display_name,
                unit=item.unit,
                is_dependent=item.is_dependent,
                normal_range_min=float(item.normal_range_min),
                normal_range_max=float(item.normal_range_max),
                aliases=json.dumps(list(item.aliases)),
            )
        )
    db.flush()


def _seed_score_weights(db: Session) -> None:
    for biomarker in db.query(BiomarkerDefinition).order_by(BiomarkerDefinition.id.asc()).all():
        db.add(ScoreWeight(biomarker=biomarker, weight=weight_for_code(biomarker.code)))


def seed_taxonomy(db: Session) -> bool:
    """Create categories, data sources, biomarkers and weights if the store is empty.

    Returns True when seeding ran, False when a taxonomy was already present.
    Raises TaxonomySeedError on inconsistent seed data; nothing is persisted then.
    """
    if _has_taxonomy(db):
        logger.info("Biomarker taxonomy already present; skipping seed")
        return False

    try:
        _seed_categories(db)
        _seed_data_sources(db)
        _seed_biomarker_definitions(db)
        _seed_score_weights(db)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Seeded %d categories, %d data sources, %d biomarkers", len(CATEGORIES), len(DATA_SOURCES), len(BIOMARKERS))
    warn_if_unbalanced(db)
    return True


def seed_on_startup(factory: sessionmaker = SessionLocal) -> bool:
    with session_scope(factory) as db:
        return seed_taxonomy(db)
