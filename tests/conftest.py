import pytest

from users_shared.logger import StructuredLogger
from users_shared.metrics import MetricsClient


@pytest.fixture(autouse=True)
def metrics_disabled(monkeypatch):
    """Keep tests away from CloudWatch unless a test opts in."""
    monkeypatch.setenv('USERS_METRICS_ENABLED', 'false')
    monkeypatch.delenv('USERS_METRICS_NAMESPACE', raising=False)


@pytest.fixture
def logger():
    return StructuredLogger(
        correlation_id='test-correlation-id',
        operation='users-profile-update',
        metrics=MetricsClient('users-profile-update', enabled=False)
    )
