"""Insights Generator.

Maps developer metrics to a prioritized list of actionable insights. Each
rule group (activity, quality, growth, impact) looks at one or two metrics
and contributes at most one insight per metric. Output is ordered high →
medium → low priority; insights of equal priority keep rule order.
"""

from __future__ import annotations

from typing import Any

from analytics.models import (
    PRIORITY_ORDER,
    Insight,
    InsightCategory,
    MetricsLike,
    Priority,
    metric_values,
)
from devmetrics.logging_config import get_logger
from devmetrics.metrics import CALCULATION_DURATION, INSIGHTS_GENERATED

logger = get_logger(__name__)

# Insight templates keyed by stable id
INSIGHT_TEMPLATES: dict[str, dict[str, Any]] = {
    "low-commit-frequency": {
        "category": InsightCategory.OPPORTUNITY,
        "priority": Priority.HIGH,
        "title": "Increase Commit Frequency",
        "description": (
            "Your commit frequency is below average. Regular commits improve "
            "visibility and career opportunities."
        ),
        "action_items": [
            "Set a goal to commit at least once per day",
            "Break down large tasks into smaller commits",
            "Use GitHub streaks for motivation",
        ],
        "estimated_impact": Priority.HIGH,
        "timeframe": "1-2 months",
    },
    "high-commit-activity": {
        "category": InsightCategory.STRENGTH,
        "priority": Priority.MEDIUM,
        "title": "Excellent Activity Level",
        "description": "Your commit frequency is in the top 10% of developers.",
        "action_items": ["Maintain current momentum", "Share your workflow tips"],
        "estimated_impact": Priority.HIGH,
        "timeframe": "ongoing",
    },
    "improve-code-quality": {
        "category": InsightCategory.WARNING,
        "priority": Priority.HIGH,
        "title": "Code Quality Needs Attention",
        "description": "Your code quality score suggests room for improvement.",
        "action_items": [
            "Increase code review participation",
            "Add more unit tests",
            "Follow style guides consistently",
            "Use linting tools",
        ],
        "estimated_impact": Priority.HIGH,
        "timeframe": "2-3 months",
    },
    "increase-collaboration": {
        "category": InsightCategory.OPPORTUNITY,
        "priority": Priority.MEDIUM,
        "title": "Boost Team Collaboration",
        "description": "More collaboration can accelerate your growth.",
        "action_items": [
            "Review more pull requests",
            "Participate in code discussions",
            "Mentor junior developers",
        ],
        "estimated_impact": Priority.MEDIUM,
        "timeframe": "1-2 months",
    },
    "expand-skills": {
        "category": InsightCategory.SUGGESTION,
        "priority": Priority.MEDIUM,
        "title": "Diversify Your Skills",
        "description": "Learning new technologies increases marketability.",
        "action_items": [
            "Pick one new language to learn",
            "Contribute to projects in different stacks",
            "Complete online courses",
        ],
        "estimated_impact": Priority.HIGH,
        "timeframe": "3-6 months",
    },
    "polyglot-expertise": {
        "category": InsightCategory.STRENGTH,
        "priority": Priority.LOW,
        "title": "Impressive Polyglot Skills",
        "description": "Your diverse skill set is a major strength.",
        "action_items": [
            "Leverage this in job applications",
            "Write about your cross-stack experience",
        ],
        "estimated_impact": Priority.MEDIUM,
        "timeframe": "ongoing",
    },
    "build-open-source": {
        "category": InsightCategory.SUGGESTION,
        "priority": Priority.LOW,
        "title": "Build Open Source Presence",
        "description": "Open source contributions enhance your reputation.",
        "action_items": [
            "Create utility libraries",
            "Contribute to popular projects",
            "Document your projects well",
            "Promote on social media",
        ],
        "estimated_impact": Priority.MEDIUM,
        "timeframe": "6-12 months",
    },
    "strong-oss-impact": {
        "category": InsightCategory.STRENGTH,
        "priority": Priority.LOW,
        "title": "Strong Open Source Impact",
        "description": "Your projects have gained community recognition.",
        "action_items": [
            "Continue maintaining popular projects",
            "Engage with contributors",
        ],
        "estimated_impact": Priority.HIGH,
        "timeframe": "ongoing",
    },
}


def _build(insight_id: str) -> Insight:
    return Insight(id=insight_id, **INSIGHT_TEMPLATES[insight_id])


class InsightsGenerator:
    """Rule-based generator of prioritized developer insights."""

    @CALCULATION_DURATION.labels(operation="insights").time()
    def generate_insights(self, metrics: MetricsLike) -> list[Insight]:
        """Generate insights from a metric record or a partial metric mapping.

        Metrics missing from ``metrics`` never trigger a rule.
        """
        values = metric_values(metrics)

        insights: list[Insight] = []
        insights.extend(self._analyze_activity(values))
        insights.extend(self._analyze_quality(values))
        insights.extend(self._analyze_growth(values))
        insights.extend(self._analyze_impact(values))

        # list.sort is stable, so rule order survives within a priority
        insights.sort(key=lambda i: PRIORITY_ORDER[i.priority])

        for insight in insights:
            INSIGHTS_GENERATED.labels(
                category=insight.category.value, priority=insight.priority.value
            ).inc()
        logger.debug("insights_generated", count=len(insights), ids=[i.id for i in insights])
        return insights

    def _analyze_activity(self, values: dict[str, float]) -> list[Insight]:
        commit_frequency = values.get("commit_frequency")
        if commit_frequency is None:
            return []
        if commit_frequency < 5:
            return [_build("low-commit-frequency")]
        if commit_frequency > 15:
            return [_build("high-commit-activity")]
        return []

    def _analyze_quality(self, values: dict[str, float]) -> list[Insight]:
        insights: list[Insight] = []
        quality = values.get("code_quality_score")
        if quality is not None and quality < 60:
            insights.append(_build("improve-code-quality"))

        collaboration = values.get("collaboration_score")
        if collaboration is not None and collaboration < 50:
            insights.append(_build("increase-collaboration"))
        return insights

    def _analyze_growth(self, values: dict[str, float]) -> list[Insight]:
        diversity = values.get("skill_diversity")
        if diversity is None:
            return []
        if diversity < 3:
            return [_build("expand-skills")]
        if diversity > 7:
            return [_build("polyglot-expertise")]
        return []

    def _analyze_impact(self, values: dict[str, float]) -> list[Insight]:
        stars = values.get("repo_stars")
        if stars is None:
            return []
        if stars < 50:
            return [_build("build-open-source")]
        if stars > 100:
            return [_build("strong-oss-impact")]
        return []
