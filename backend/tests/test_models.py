"""Tests for engine value objects and the metric iteration helper."""

from datetime import date

import pytest
from pydantic import ValidationError

from analytics.models import (
    METRIC_DIMENSIONS,
    METRIC_FIELDS,
    DeveloperMetrics,
    DeveloperProfile,
    SimilarityMatch,
    SkillTrendPoint,
    format_metric_name,
    metric_values,
)


class TestDeveloperMetrics:
    def test_field_set(self):
        assert len(METRIC_FIELDS) == 18
        assert METRIC_FIELDS[0] == "commit_frequency"
        assert METRIC_FIELDS[-1] == "downloads"

    def test_dimensions_cover_every_field_once(self):
        flattened = [name for names in METRIC_DIMENSIONS.values() for name in names]
        assert sorted(flattened) == sorted(METRIC_FIELDS)
        assert len(flattened) == len(set(flattened))

    def test_camel_case_round_trip(self):
        metrics = DeveloperMetrics.model_validate({"commitFrequency": 4, "repoStars": 12})
        assert metrics.commit_frequency == 4
        data = metrics.model_dump(by_alias=True)
        assert data["commitFrequency"] == 4
        assert data["issueResolutionRate"] == 0

    def test_frozen(self):
        metrics = DeveloperMetrics()
        with pytest.raises(ValidationError):
            metrics.commit_frequency = 3


class TestMetricValues:
    def test_full_record(self):
        values = metric_values(DeveloperMetrics(forks=2))
        assert list(values) == list(METRIC_FIELDS)
        assert values["forks"] == 2.0

    def test_partial_mapping_in_field_order(self):
        values = metric_values({"repoStars": 5, "commit_frequency": 1, "unknown": 9})
        assert values == {"commit_frequency": 1.0, "repo_stars": 5.0}
        assert list(values) == ["commit_frequency", "repo_stars"]

    def test_none_skipped(self):
        assert metric_values({"forks": None, "downloads": 3}) == {"downloads": 3.0}

    def test_snake_case_wins_over_alias(self):
        assert metric_values({"repo_stars": 1, "repoStars": 2}) == {"repo_stars": 1.0}


class TestProfiles:
    def test_profile_keeps_partial_metrics(self):
        profile = DeveloperProfile(id="1", name="Ada", metrics={"forks": 3})
        assert profile.metrics == {"forks": 3.0}

    def test_profile_accepts_missing_values(self):
        profile = DeveloperProfile(id="1", name="Ada", metrics={"forks": 3, "downloads": None})
        assert profile.metrics == {"forks": 3.0, "downloads": None}
        assert metric_values(profile.metrics) == {"forks": 3.0}

    def test_profile_accepts_full_record(self):
        profile = DeveloperProfile(id="1", name="Ada", metrics=DeveloperMetrics(forks=3))
        assert isinstance(profile.metrics, DeveloperMetrics)

    def test_similarity_bounds_enforced(self):
        with pytest.raises(ValidationError):
            SimilarityMatch(id="1", name="x", similarity=1.5)

    def test_skill_point_date(self):
        point = SkillTrendPoint.model_validate(
            {"skill": "Go", "category": "Language", "usage": 40, "date": "2024-03-01"}
        )
        assert point.date == date(2024, 3, 1)


def test_format_metric_name():
    assert format_metric_name("code_quality_score") == "Code Quality Score"
    assert format_metric_name("forks") == "Forks"
