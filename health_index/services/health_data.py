"""Daily activity readings from an external health-data provider.

The provider is a collaborator (a phone health store, a wearable bridge, a mock).
Each metric fetch runs as its own task; any failure in one never affects the
others and is logged and reported as a zero reading, the same as a missing value.
A failed authorization request yields an all-zero, unauthorized snapshot.
"""

import asyncio
import logging
import random
from enum import Enum
from typing import Protocol

from sqlalchemy.orm import Session

from health_index.schemas.health_data import HealthDataReading, HealthDataResponse, HealthDataSnapshot
from health_index.services.resolver import resolve_biomarker

logger = logging.getLogger(__name__)


class HealthDataError(RuntimeError):
    pass


class HealthMetric(str, Enum):
    STEPS = "steps"
    HEART_RATE = "heart_rate"
    ACTIVE_ENERGY = "active_energy"


# Provider-side quantity identifiers; seeded as biomarker aliases so the resolver can map them.
METRIC_LABELS: dict[HealthMetric, str] = {
    HealthMetric.STEPS: "stepCount",
    HealthMetric.HEART_RATE: "heartRate",
    HealthMetric.ACTIVE_ENERGY: "activeEnergyBurned",
}

MOCK_RANGES: dict[HealthMetric, tuple[float, float]] = {
    HealthMetric.STEPS: (6000.0, 12000.0),
    HealthMetric.HEART_RATE: (60.0, 85.0),
    HealthMetric.ACTIVE_ENERGY: (250.0, 450.0),
}


class HealthDataProvider(Protocol):
    async def request_authorization(self) -> None:
        ...

    async def fetch_daily_sum(self, metric: HealthMetric) -> float | None:
        """Return today's cumulative value for ``metric``, or None when nothing was recorded."""
        ...


class MockHealthDataProvider:
    def __init__(self, delay_seconds: float = 0.5, rng: random.Random | None = None):
        self.delay_seconds = delay_seconds
        self.rng = rng or random.Random()

    async def request_authorization(self) -> None:
        return None

    async def fetch_daily_sum(self, metric: HealthMetric) -> float | None:
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)
        low, high = MOCK_RANGES[metric]
        return self.rng.uniform(low, high)


class UnconfiguredHealthDataProvider:
    """Stands in when no real provider is wired up; every request is refused."""

    async def request_authorization(self) -> None:
        raise HealthDataError("No health data provider is configured")

    async def fetch_daily_sum(self, metric: HealthMetric) -> float | None:
        raise HealthDataError("No health data provider is configured")


async def _fetch_metric(provider: HealthDataProvider, metric: HealthMetric) -> float:
    try:
        value = await provider.fetch_daily_sum(metric)
    except HealthDataError as exc:
        logger.warning("Error fetching %s: %s", metric.value, exc)
        return 0.0
    except Exception:
        logger.exception("Unexpected error fetching %s", metric.value)
        return 0.0
    if value is None:
        return 0.0
    return float(value)


async def fetch_latest(provider: HealthDataProvider) -> HealthDataSnapshot:
    try:
        await provider.request_authorization()
    except HealthDataError as exc:
        logger.warning("Health data authorization failed: %s", exc)
        return HealthDataSnapshot(authorized=False)
    except Exception:
        logger.exception("Unexpected error requesting health data authorization")
        return HealthDataSnapshot(authorized=False)

    tasks = [asyncio.create_task(_fetch_metric(provider, metric)) for metric in HealthMetric]
    steps, heart_rate, active_energy = await asyncio.gather(*tasks)
    return HealthDataSnapshot(
        authorized=True,
        steps=steps,
        heart_rate=heart_rate,
        active_energy=active_energy,
    )


def annotate_snapshot(db: Session, snapshot: HealthDataSnapshot) -> HealthDataResponse:
    readings = []
    for metric in HealthMetric:
        value = getattr(snapshot, metric.value)
        biomarker = resolve_biomarker(db, METRIC_LABELS[metric])
        readings.append(
            HealthDataReading(
                metric=metric.value,
                value=value,
                biomarker_code=biomarker.code if biomarker else None,
                unit=biomarker.unit if biomarker else None,
                within_normal_range=biomarker.is_within_normal_range(value) if biomarker and snapshot.authorized else None,
            )
        )
    return HealthDataResponse(authorized=snapshot.authorized, readings=readings)
