import pytest
from sqlalchemy.exc import IntegrityError

from health_index.models.biomarker import BiomarkerCategory, BiomarkerDefinition, ScoreWeight
from health_index.models.data_source import DataSource
from health_index.models.health_index import HealthIndexRecord


def _assert_rejected(session, obj):
    session.add(obj)
    with pytest.raises(IntegrityError):
        session.commit()
    session.rollback()


def _definition(seeded_session, **overrides):
    blood = seeded_session.query(BiomarkerCategory).filter(BiomarkerCategory.name == "Blood").one()
    fields = dict(
        category_id=blood.id,
        code="LDL",
        display_name="LDL Cholesterol",
        unit="mg/dL",
        is_dependent=True,
        normal_range_min=0,
        normal_range_max=100,
    )
    fields.update(overrides)
    return BiomarkerDefinition(**fields)


def test_duplicate_category_name(seeded_session):
    _assert_rejected(seeded_session, BiomarkerCategory(name="Blood", description="again"))


def test_duplicate_biomarker_code(seeded_session):
    _assert_rejected(seeded_session, _definition(seeded_session, code="GLUC"))


def test_duplicate_data_source_name(seeded_session):
    _assert_rejected(seeded_session, DataSource(name="lab", organization="Another Lab"))


def test_second_weight_for_same_biomarker(seeded_session):
    bmi = seeded_session.query(BiomarkerDefinition).filter(BiomarkerDefinition.code == "BMI").one()
    _assert_rejected(seeded_session, ScoreWeight(biomarker_id=bmi.id, weight=0.05))


def test_inverted_normal_range(seeded_session):
    _assert_rejected(seeded_session, _definition(seeded_session, normal_range_min=130, normal_range_max=100))


def test_equal_range_bounds_are_allowed(seeded_session):
    seeded_session.add(_definition(seeded_session, normal_range_min=100, normal_range_max=100))
    seeded_session.commit()
    assert seeded_session.query(BiomarkerDefinition).filter(BiomarkerDefinition.code == "LDL").count() == 1


@pytest.mark.parametrize(
    "fields",
    [
        {"overall_score": 101},
        {"overall_score": -1},
        {"overall_score": 50, "physical_score": 120},
        {"overall_score": 50, "blood_score": -5},
        {"overall_score": 50, "wellness_score": 100.5},
    ],
)
def test_health_index_scores_outside_scale(db_session, fields):
    _assert_rejected(db_session, HealthIndexRecord(**fields))


def test_health_index_category_scores_are_optional(db_session):
    db_session.add(HealthIndexRecord(overall_score=78))
    db_session.commit()
    assert db_session.query(HealthIndexRecord).one().physical_score is None
