from health_index.config import settings
from health_index.services.health_data import (
    HealthDataProvider,
    MockHealthDataProvider,
    UnconfiguredHealthDataProvider,
)


def get_health_data_provider() -> HealthDataProvider:
    if settings.health_data_use_mock:
        return MockHealthDataProvider(delay_seconds=settings.health_data_mock_delay_seconds)
    return UnconfiguredHealthDataProvider()
