"""Numeric helpers shared by the calculator and comparison engine.

This module provides utilities for:
- Count-based percentile and rank of a value within a peer population.
- Saturating normalization and weighted aggregation for composite scores.
- Relative gaps and normalized distance between metric vectors.
- Simple time-series helpers (growth between periods, rolling average,
  z-score anomaly flags, Pearson correlation).

Every helper returns ``0`` (or an empty result) instead of dividing by zero.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence

EPSILON = 1e-9


def safe_divide(numerator: float, denominator: float) -> float:
    """Divide, returning ``0.0`` when the denominator is not positive."""
    if denominator <= 0:
        return 0.0
    return numerator / denominator


def percentile_of(value: float, population: Sequence[float]) -> float:
    """Share of ``population`` at or below ``value``, scaled to ``[0, 100]``.

    An empty population means there is nobody to lose to, so the result is
    ``100.0``.
    """
    if not population:
        return 100.0
    at_or_below = sum(1 for peer in population if peer <= value)
    return min(max(at_or_below / len(population) * 100, 0.0), 100.0)


def rank_of(value: float, population: Sequence[float]) -> int:
    """1-based rank of ``value``: one plus the number of strictly greater peers."""
    return 1 + sum(1 for peer in population if peer > value)


def median(values: Sequence[float]) -> float | None:
    """Median of ``values`` or ``None`` when empty."""
    if not values:
        return None
    ordered = sorted(values)
    middle = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[middle]
    return (ordered[middle - 1] + ordered[middle]) / 2


def saturate(value: float, reference: float) -> float:
    """Map ``[0, inf)`` onto ``[0, 100)`` with diminishing returns.

    ``reference`` is the value that earns half of the available points. The
    curve is strictly increasing, so a larger value always scores higher.
    """
    if value <= 0:
        return 0.0
    if reference <= 0:
        return 100.0
    return value / (value + reference) * 100


def weighted_average(values: Mapping[str, float], weights: Mapping[str, float]) -> float:
    """Weighted mean over the keys present in both mappings.

    Non-positive weights are ignored. Returns ``0.0`` when no weighted key is
    present.
    """
    total = 0.0
    weight_sum = 0.0
    for key, weight in weights.items():
        if weight <= 0 or key not in values:
            continue
        total += values[key] * weight
        weight_sum += weight
    return safe_divide(total, weight_sum)


def relative_gap(a: float, b: float) -> float:
    """``|a - b|`` as a fraction of the larger magnitude (symmetric in a, b)."""
    return abs(a - b) / max(abs(a), abs(b), EPSILON)


def normalized_distance(a: Mapping[str, float], b: Mapping[str, float]) -> float | None:
    """Mean per-key normalized gap over the keys ``a`` and ``b`` share.

    Each key contributes ``|a - b| / max(|a|, |b|, 1)`` so that large-magnitude
    metrics (stars, downloads) weigh no more than small ones. Returns ``None``
    when no key is shared.
    """
    shared = [key for key in a if key in b]
    if not shared:
        return None
    total = sum(abs(a[key] - b[key]) / max(abs(a[key]), abs(b[key]), 1.0) for key in shared)
    return total / len(shared)


def growth_rate(
    current: Mapping[str, float], previous: Mapping[str, float]
) -> dict[str, tuple[float, float]]:
    """Absolute and percentage change per key of ``current``.

    Keys missing from ``previous`` count as ``0``; percentage change from a
    zero baseline is reported as ``0``.
    """
    growth: dict[str, tuple[float, float]] = {}
    for key, current_value in current.items():
        previous_value = previous.get(key, 0.0)
        absolute = current_value - previous_value
        percentage = absolute / previous_value * 100 if previous_value != 0 else 0.0
        growth[key] = (round(absolute, 2), round(percentage, 1))
    return growth


def rolling_average(values: Sequence[float], window: int) -> list[float]:
    """Trailing moving average; early points average over what is available."""
    if window <= 0:
        raise ValueError("Rolling window must be a positive integer.")
    averages: list[float] = []
    for index in range(len(values)):
        chunk = values[max(0, index - window + 1) : index + 1]
        averages.append(round(sum(chunk) / len(chunk), 2))
    return averages


def z_scores(values: Sequence[float]) -> list[float]:
    """Population z-score of each value; all zeros when there is no spread."""
    if not values:
        return []
    mean = sum(values) / len(values)
    std_dev = math.sqrt(sum((v - mean) ** 2 for v in values) / len(values))
    if std_dev == 0:
        return [0.0 for _ in values]
    return [(v - mean) / std_dev for v in values]


def detect_anomalies(values: Sequence[float], threshold: float = 2.0) -> list[bool]:
    """Flag values whose absolute z-score exceeds ``threshold``."""
    return [abs(score) > threshold for score in z_scores(values)]


def correlation(xs: Sequence[float], ys: Sequence[float]) -> tuple[float, str, str]:
    """Pearson correlation with a coarse strength and direction label.

    Returns ``(coefficient, strength, direction)`` where strength is one of
    ``strong``/``moderate``/``weak``/``none`` and direction is
    ``positive``/``negative``/``none``. Mismatched or too-short series give
    ``(0.0, "none", "none")``.
    """
    if len(xs) != len(ys) or len(xs) < 2:
        return 0.0, "none", "none"

    n = len(xs)
    mean_x = sum(xs) / n
    mean_y = sum(ys) / n
    numerator = 0.0
    sum_sq_x = 0.0
    sum_sq_y = 0.0
    for x, y in zip(xs, ys):
        dx = x - mean_x
        dy = y - mean_y
        numerator += dx * dy
        sum_sq_x += dx * dx
        sum_sq_y += dy * dy

    denominator = math.sqrt(sum_sq_x * sum_sq_y)
    coefficient = numerator / denominator if denominator != 0 else 0.0

    magnitude = abs(coefficient)
    if magnitude >= 0.7:
        strength = "strong"
    elif magnitude >= 0.4:
        strength = "moderate"
    elif magnitude >= 0.2:
        strength = "weak"
    else:
        strength = "none"

    if coefficient > 0.1:
        direction = "positive"
    elif coefficient < -0.1:
        direction = "negative"
    else:
        direction = "none"

    return round(coefficient, 2), strength, direction
