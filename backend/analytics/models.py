"""Value objects exchanged with the analytics engine.

Every model is immutable once built. Python attributes are snake_case; JSON
output uses camelCase aliases (``model_dump(mode="json", by_alias=True)``) and
both spellings are accepted on input.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Mapping
from enum import Enum
from typing import Annotated, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class EngineModel(BaseModel):
    """Base for all engine value objects."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Winner(str, Enum):
    USER1 = "user1"
    USER2 = "user2"
    TIE = "tie"


class Significance(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Position(str, Enum):
    TOP = "top"
    ABOVE_AVERAGE = "above-average"
    AVERAGE = "average"
    BELOW_AVERAGE = "below-average"


class InsightCategory(str, Enum):
    STRENGTH = "strength"
    OPPORTUNITY = "opportunity"
    WARNING = "warning"
    SUGGESTION = "suggestion"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


PRIORITY_ORDER: dict[Priority, int] = {
    Priority.HIGH: 0,
    Priority.MEDIUM: 1,
    Priority.LOW: 2,
}


class ActivityInput(EngineModel):
    """Raw activity counters for one developer, plus upstream estimates.

    The estimate fields are scored elsewhere (code analysis, package
    registries, mentorship records) and pass straight through.
    """

    commits: float = 0
    prs: float = 0
    issues: float = 0
    resolved_issues: float = 0
    reviews: float = 0
    received_reviews: float = 0
    stars: float = 0
    forks: float = 0
    languages: list[str] = Field(default_factory=list)
    weeks_active: float = 0

    code_quality_score: float = 0
    test_coverage_average: float = 0
    documentation_score: float = 0
    bug_rate: float = 0
    collaboration_score: float = 0
    mentorship_activity: float = 0
    community_engagement: float = 0
    learning_velocity: float = 0
    project_complexity: float = 0
    dependents: float = 0
    downloads: float = 0


class DeveloperMetrics(EngineModel):
    """Normalized developer metrics across five dimensions."""

    # Activity
    commit_frequency: float = 0.0
    pr_velocity: float = 0.0
    issue_resolution_rate: float = 0.0
    code_review_participation: float = 0.0

    # Quality
    code_quality_score: float = 0.0
    test_coverage_average: float = 0.0
    documentation_score: float = 0.0
    bug_rate: float = 0.0

    # Collaboration
    collaboration_score: float = 0.0
    mentorship_activity: float = 0.0
    community_engagement: float = 0.0

    # Growth
    skill_diversity: float = 0.0
    learning_velocity: float = 0.0
    project_complexity: float = 0.0

    # Impact
    repo_stars: float = 0.0
    forks: float = 0.0
    dependents: float = 0.0
    downloads: float = 0.0


METRIC_FIELDS: tuple[str, ...] = tuple(DeveloperMetrics.model_fields)
METRIC_ALIASES: dict[str, str] = {name: to_camel(name) for name in METRIC_FIELDS}

METRIC_DIMENSIONS: dict[str, tuple[str, ...]] = {
    "activity": (
        "commit_frequency",
        "pr_velocity",
        "issue_resolution_rate",
        "code_review_participation",
    ),
    "quality": (
        "code_quality_score",
        "test_coverage_average",
        "documentation_score",
        "bug_rate",
    ),
    "collaboration": (
        "collaboration_score",
        "mentorship_activity",
        "community_engagement",
    ),
    "growth": ("skill_diversity", "learning_velocity", "project_complexity"),
    "impact": ("repo_stars", "forks", "dependents", "downloads"),
}

# A full record, or a partial mapping keyed by field name or camelCase alias
MetricsLike = Union[DeveloperMetrics, Mapping[str, float | None]]


def metric_values(metrics: MetricsLike) -> dict[str, float]:
    """Return the known metric values carried by ``metrics``.

    A ``DeveloperMetrics`` yields all fields. A mapping yields only the
    metric keys it contains; unknown keys and ``None`` values are skipped.
    Result order always follows ``METRIC_FIELDS``.
    """
    if isinstance(metrics, DeveloperMetrics):
        return {name: float(getattr(metrics, name)) for name in METRIC_FIELDS}

    values: dict[str, float] = {}
    for name in METRIC_FIELDS:
        if name in metrics:
            raw = metrics[name]
        elif METRIC_ALIASES[name] in metrics:
            raw = metrics[METRIC_ALIASES[name]]
        else:
            continue
        if raw is None:
            continue
        values[name] = float(raw)
    return values


def format_metric_name(name: str) -> str:
    """``code_quality_score`` -> ``Code Quality Score``."""
    return " ".join(part.capitalize() for part in name.split("_"))


class DeveloperProfile(EngineModel):
    """A developer identity paired with their metrics."""

    id: str
    name: str
    metrics: Annotated[
        Union[dict[str, float | None], DeveloperMetrics],
        Field(union_mode="left_to_right"),
    ]


# --- Skill trends ---


class SkillTrendPoint(EngineModel):
    """One observation of a skill's usage (0-100) at a point in time."""

    skill: str
    category: str
    usage: float
    date: dt.date


class TrendData(EngineModel):
    """Mean usage of a skill over one calendar quarter."""

    period: str
    value: float
    change: float
    percentile: float = 50.0


class SkillTrend(EngineModel):
    skill: str
    category: str
    proficiency_growth: float
    usage_over_time: list[TrendData] = Field(default_factory=list)
    market_demand: float = 0.0
    future_projection: float = 0.0


# --- Benchmarks & comparison ---


class Benchmark(EngineModel):
    """Peer-relative position for a single metric."""

    percentile: float
    rank: int


class MetricComparison(EngineModel):
    metric: str
    user1_value: float
    user2_value: float
    difference: float
    percentage_diff: float
    winner: Winner
    significance: Significance


class OverallScore(EngineModel):
    user1: float
    user2: float
    winner: Winner


class Strengths(EngineModel):
    user1: list[str] = Field(default_factory=list)
    user2: list[str] = Field(default_factory=list)


class ComparisonResult(EngineModel):
    user1: DeveloperProfile
    user2: DeveloperProfile
    comparisons: list[MetricComparison]
    overall_score: OverallScore
    strengths: Strengths
    recommendations: list[str] = Field(default_factory=list)


class RankedDeveloper(EngineModel):
    id: str
    name: str
    metrics: Annotated[
        Union[dict[str, float | None], DeveloperMetrics],
        Field(union_mode="left_to_right"),
    ]
    score: float
    rank: int


class SimilarityMatch(EngineModel):
    id: str
    name: str
    similarity: float = Field(..., ge=0.0, le=1.0)
    matching_areas: list[str] = Field(default_factory=list)


class CompetitiveInsight(EngineModel):
    position: Position
    percentile: float
    outperforming_areas: list[str] = Field(default_factory=list)
    underperforming_areas: list[str] = Field(default_factory=list)
    actionable_insights: list[str] = Field(default_factory=list)


# --- Insights ---


class Insight(EngineModel):
    """A prioritized, actionable recommendation."""

    id: str
    category: InsightCategory
    priority: Priority
    title: str
    description: str
    action_items: list[str] = Field(default_factory=list)
    estimated_impact: Priority
    timeframe: str
