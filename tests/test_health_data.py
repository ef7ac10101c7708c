import asyncio
import random

from health_index.services.health_data import (
    HealthDataError,
    HealthMetric,
    MockHealthDataProvider,
    UnconfiguredHealthDataProvider,
    annotate_snapshot,
    fetch_latest,
)
from health_index.schemas.health_data import HealthDataSnapshot


class FlakyProvider:
    def __init__(self, values):
        self.values = values

    async def request_authorization(self) -> None:
        return None

    async def fetch_daily_sum(self, metric):
        value = self.values[metric]
        if isinstance(value, Exception):
            raise value
        return value


def test_mock_provider_values_stay_in_range():
    snapshot = asyncio.run(fetch_latest(MockHealthDataProvider(delay_seconds=0, rng=random.Random(1))))
    assert snapshot.authorized is True
    assert 6000 <= snapshot.steps <= 12000
    assert 60 <= snapshot.heart_rate <= 85
    assert 250 <= snapshot.active_energy <= 450


def test_authorization_failure_yields_zeros():
    snapshot = asyncio.run(fetch_latest(UnconfiguredHealthDataProvider()))
    assert snapshot == HealthDataSnapshot(authorized=False, steps=0, heart_rate=0, active_energy=0)


def test_one_failed_metric_does_not_affect_others():
    provider = FlakyProvider(
        {
            HealthMetric.STEPS: 8421.0,
            HealthMetric.HEART_RATE: HealthDataError("sensor offline"),
            HealthMetric.ACTIVE_ENERGY: None,
        }
    )
    snapshot = asyncio.run(fetch_latest(provider))
    assert snapshot.authorized is True
    assert snapshot.steps == 8421.0
    assert snapshot.heart_rate == 0
    assert snapshot.active_energy == 0


def test_annotate_maps_metrics_to_biomarkers(seeded_session):
    snapshot = HealthDataSnapshot(authorized=True, steps=8000, heart_rate=72, active_energy=200)
    response = annotate_snapshot(seeded_session, snapshot)

    by_metric = {r.metric: r for r in response.readings}
    assert by_metric["steps"].biomarker_code == "STEPS"
    assert by_metric["steps"].within_normal_range is True
    assert by_metric["heart_rate"].biomarker_code == "RHR"
    assert by_metric["heart_rate"].unit == "bpm"
    assert by_metric["active_energy"].biomarker_code == "ACTIVE"
    assert by_metric["active_energy"].within_normal_range is False


def test_annotate_unauthorized_snapshot_has_no_range_verdict(seeded_session):
    response = annotate_snapshot(seeded_session, HealthDataSnapshot(authorized=False))
    assert response.authorized is False
    assert all(r.value == 0 and r.within_normal_range is None for r in response.readings)


def test_unexpected_metric_error_is_logged_and_zeroed(caplog):
    provider = FlakyProvider(
        {
            HealthMetric.STEPS: 100.0,
            HealthMetric.HEART_RATE: TimeoutError("query timed out"),
            HealthMetric.ACTIVE_ENERGY: 310.0,
        }
    )
    snapshot = asyncio.run(fetch_latest(provider))
    assert snapshot.authorized is True
    assert snapshot.steps == 100.0
    assert snapshot.heart_rate == 0
    assert snapshot.active_energy == 310.0
    assert "heart_rate" in caplog.text


class DeniedProvider(FlakyProvider):
    async def request_authorization(self) -> None:
        raise PermissionError("user declined access")


def test_unexpected_authorization_error_yields_zeros():
    snapshot = asyncio.run(fetch_latest(DeniedProvider({})))
    assert snapshot == HealthDataSnapshot(authorized=False)
