import pytest

from health_index.services.weights import DEFAULT_WEIGHT, WEIGHTS_BY_CODE, summarize_weights, weight_for_code


@pytest.mark.parametrize(
    "code, expected",
    [
        ("BMI", 0.15),
        ("GLUC", 0.15),
        ("HDL", 0.15),
        ("WHR", 0.10),
        ("RHR", 0.10),
        ("STEPS", 0.20),
        ("ACTIVE", 0.20),
        ("DIET", 0.10),
    ],
)
def test_known_codes(code, expected):
    assert weight_for_code(code) == expected


def test_unknown_codes_get_default():
    assert weight_for_code("UNKNOWN") == 0.05
    assert weight_for_code("") == DEFAULT_WEIGHT
    # lookup is exact
    assert weight_for_code("bmi") == DEFAULT_WEIGHT


def test_lookup_is_deterministic():
    assert [weight_for_code(c) for c in WEIGHTS_BY_CODE] == [weight_for_code(c) for c in WEIGHTS_BY_CODE]


def test_summary_reports_total_without_correcting_it(seeded_session):
    summary = summarize_weights(seeded_session)
    assert len(summary.weights) == 8
    assert summary.total == pytest.approx(1.15)
    assert summary.balanced is False
    assert summary.weights[0].category == "Physical"


def test_summary_on_empty_store(db_session):
    summary = summarize_weights(db_session)
    assert summary.weights == []
    assert summary.total == 0
