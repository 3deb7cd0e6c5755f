"""Tests for numeric helpers."""

import pytest

from analytics.numeric import (
    correlation,
    detect_anomalies,
    growth_rate,
    median,
    normalized_distance,
    percentile_of,
    rank_of,
    relative_gap,
    rolling_average,
    safe_divide,
    saturate,
    weighted_average,
    z_scores,
)


class TestSafeDivide:
    def test_normal(self):
        assert safe_divide(10, 4) == 2.5

    def test_zero_and_negative_denominator(self):
        assert safe_divide(10, 0) == 0.0
        assert safe_divide(10, -2) == 0.0


class TestPercentileAndRank:
    def test_percentile(self):
        assert percentile_of(15, [10, 12, 20, 5]) == 75
        assert percentile_of(1, [10, 12]) == 0
        assert percentile_of(12, [10, 12]) == 100

    def test_empty_population(self):
        assert percentile_of(0, []) == 100
        assert rank_of(0, []) == 1

    def test_rank_counts_strictly_greater(self):
        assert rank_of(15, [10, 12, 20, 5]) == 2
        assert rank_of(10, [10, 10, 10]) == 1
        assert rank_of(0, [1, 2, 3]) == 4


class TestMedian:
    def test_odd_and_even(self):
        assert median([3, 1, 2]) == 2
        assert median([4, 1, 3, 2]) == 2.5

    def test_empty(self):
        assert median([]) is None


class TestSaturate:
    def test_half_at_reference(self):
        assert saturate(10, 10) == 50

    def test_strictly_increasing_and_bounded(self):
        values = [saturate(v, 25) for v in (1, 10, 100, 10_000)]
        assert values == sorted(values)
        assert len(set(values)) == len(values)
        assert all(0 < v < 100 for v in values)

    def test_non_positive(self):
        assert saturate(0, 10) == 0
        assert saturate(-3, 10) == 0
        assert saturate(5, 0) == 100


class TestWeightedAverage:
    def test_only_present_keys(self):
        values = {"a": 100.0, "b": 0.0}
        weights = {"a": 0.25, "b": 0.25, "c": 0.5}
        assert weighted_average(values, weights) == 50

    def test_no_overlap(self):
        assert weighted_average({"x": 10}, {"y": 1}) == 0

    def test_ignores_non_positive_weights(self):
        assert weighted_average({"a": 80, "b": 10}, {"a": 1, "b": -1}) == 80


class TestDistance:
    def test_relative_gap_symmetric(self):
        assert relative_gap(10, 8) == relative_gap(8, 10) == pytest.approx(0.2)
        assert relative_gap(0, 0) == 0

    def test_normalized_distance(self):
        assert normalized_distance({"a": 10, "b": 100}, {"a": 5, "b": 10}) == pytest.approx(0.7)
        assert normalized_distance({"a": 0.2}, {"a": 0.1}) == pytest.approx(0.1)

    def test_no_shared_keys(self):
        assert normalized_distance({"a": 1}, {"b": 1}) is None


class TestSeriesHelpers:
    def test_growth_rate(self):
        growth = growth_rate({"commits": 30, "stars": 5}, {"commits": 20})
        assert growth["commits"] == (10, 50)
        assert growth["stars"] == (5, 0)

    def test_rolling_average(self):
        assert rolling_average([2, 4, 6, 8], 2) == [2, 3, 5, 7]
        assert rolling_average([], 3) == []

    def test_rolling_average_rejects_bad_window(self):
        with pytest.raises(ValueError):
            rolling_average([1, 2], 0)

    def test_z_scores_flat_series(self):
        assert z_scores([4, 4, 4]) == [0, 0, 0]
        assert z_scores([]) == []

    def test_detect_anomalies(self):
        values = [10, 11, 9, 10, 10, 11, 9, 10, 60]
        flags = detect_anomalies(values)
        assert flags[-1] is True
        assert not any(flags[:-1])

    def test_correlation(self):
        assert correlation([1, 2, 3, 4], [2, 4, 6, 8]) == (1.0, "strong", "positive")
        assert correlation([1, 2, 3, 4], [8, 6, 4, 2]) == (-1.0, "strong", "negative")
        assert correlation([1, 2], [1]) == (0.0, "none", "none")
        assert correlation([1, 1, 1], [2, 5, 9]) == (0.0, "none", "none")
