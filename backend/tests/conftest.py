"""Shared test fixtures for the developer metrics engine."""

import pytest

from analytics.comparison_engine import ComparisonEngine
from analytics.metrics_calculator import MetricsCalculator
from analytics.models import ActivityInput, DeveloperMetrics
from devmetrics.config import Environment, Settings


@pytest.fixture
def test_settings() -> Settings:
    """Provide test settings with default thresholds."""
    return Settings(environment=Environment.TESTING, log_level="DEBUG")


@pytest.fixture
def calculator(test_settings) -> MetricsCalculator:
    return MetricsCalculator(test_settings)


@pytest.fixture
def engine(test_settings) -> ComparisonEngine:
    return ComparisonEngine(test_settings)


@pytest.fixture
def sample_activity() -> ActivityInput:
    """Ten weeks of steady activity across three languages."""
    return ActivityInput(
        commits=100,
        prs=20,
        issues=10,
        resolved_issues=8,
        reviews=15,
        received_reviews=10,
        stars=50,
        forks=10,
        languages=["TypeScript", "Python", "Go"],
        weeks_active=10,
    )


@pytest.fixture
def strong_metrics() -> DeveloperMetrics:
    """A developer well ahead of ``weak_peers`` on every metric."""
    return DeveloperMetrics(**{name: 100.0 for name in DeveloperMetrics.model_fields})


@pytest.fixture
def weak_peers() -> list[DeveloperMetrics]:
    return [
        DeveloperMetrics(**{name: value for name in DeveloperMetrics.model_fields})
        for value in (5.0, 10.0, 20.0, 30.0)
    ]
