"""Tests for settings validation and the engine error format."""

import pytest

from devmetrics.config import Environment, Settings, get_settings
from devmetrics.exceptions import (
    ConfigurationError,
    EngineBaseError,
    NoComparableMetricsError,
)


class TestSettings:
    def test_defaults(self, test_settings):
        assert test_settings.environment == Environment.TESTING
        assert test_settings.significance_high == 0.25
        assert test_settings.significance_medium == 0.10
        assert test_settings.position_top == 75
        assert sum(test_settings.composite_weights.values()) == pytest.approx(1.0)
        assert not test_settings.is_production

    def test_environment_case_insensitive(self):
        assert Settings(environment="PRODUCTION").is_production

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("DEVMETRICS_SIGNIFICANCE_HIGH", "0.5")
        monkeypatch.setenv("DEVMETRICS_RAPID_GROWTH_THRESHOLD", "35")
        settings = Settings()
        assert settings.significance_high == 0.5
        assert settings.rapid_growth_threshold == 35

    def test_inverted_significance_bands(self):
        with pytest.raises(ConfigurationError) as exc_info:
            Settings(significance_high=0.1, significance_medium=0.2)
        assert exc_info.value.code == "INVALID_CONFIGURATION"
        assert exc_info.value.details["significance_high"] == 0.1

    def test_inverted_position_cut_points(self):
        with pytest.raises(ConfigurationError):
            Settings(position_top=40, position_above_average=50)

    def test_weights_need_references(self):
        with pytest.raises(ConfigurationError) as exc_info:
            Settings(composite_weights={"downloads": 1.0})
        assert exc_info.value.details["missing"] == ["downloads"]

    def test_weights_need_positive_sum(self):
        with pytest.raises(ConfigurationError):
            Settings(composite_weights={"forks": 0.0})

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()


class TestErrors:
    def test_no_comparable_metrics_to_dict(self):
        error = NoComparableMetricsError(["forks"], ["downloads"])
        assert isinstance(error, EngineBaseError)
        assert error.to_dict() == {
            "error": {
                "code": "NO_COMPARABLE_METRICS",
                "message": "No comparable metrics between the two developers",
                "details": {"left_metrics": ["forks"], "right_metrics": ["downloads"]},
            }
        }

    def test_details_omitted_when_empty(self):
        error = NoComparableMetricsError()
        assert "details" not in error.to_dict()["error"]
        assert str(error) == "No comparable metrics between the two developers"
