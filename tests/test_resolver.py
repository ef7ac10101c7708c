import pytest

from health_index.services.resolver import load_aliases, resolve_biomarker


@pytest.mark.parametrize(
    "label, code",
    [
        ("GLUC", "GLUC"),
        ("Fasting Glucose", "GLUC"),
        ("glucose", "GLUC"),
        ("HDL Cholesterol", "HDL"),
        ("stepCount", "STEPS"),
        ("heart rate", "RHR"),
        ("activeEnergyBurned", "ACTIVE"),
        ("Body-Mass Index", "BMI"),
    ],
)
def test_resolves_known_labels(seeded_session, label, code):
    biomarker = resolve_biomarker(seeded_session, label)
    assert biomarker is not None
    assert biomarker.code == code


def test_unmatched_label_returns_none(seeded_session):
    assert resolve_biomarker(seeded_session, "xyzzy") is None
    assert resolve_biomarker(seeded_session, "   ") is None


def test_threshold_override(seeded_session):
    assert resolve_biomarker(seeded_session, "xyzzy", threshold=0) is not None


def test_load_aliases_tolerates_bad_json():
    assert load_aliases('["a", "b"]') == ["a", "b"]
    assert load_aliases("not json") == []
    assert load_aliases('{"a": 1}') == []
    assert load_aliases(None) == []
