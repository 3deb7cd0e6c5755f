"""Prometheus metrics for monitoring the analytics engine.

Tracks calculation latency per operation, generated insights and
comparison outcomes.
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

CALCULATION_DURATION = Histogram(
    "devmetrics_calculation_duration_seconds",
    "Engine calculation duration in seconds",
    ["operation"],
    buckets=(0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
)

INSIGHTS_GENERATED = Counter(
    "devmetrics_insights_generated_total",
    "Structured insights generated",
    ["category", "priority"],
)

COMPARISONS_TOTAL = Counter(
    "devmetrics_comparisons_total",
    "Pairwise developer comparisons",
    ["outcome"],
)

REPORTS_BUILT = Counter(
    "devmetrics_reports_built_total",
    "Developer reports assembled",
)
