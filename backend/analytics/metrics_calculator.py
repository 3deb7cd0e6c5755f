"""Developer Metrics Calculator.

Turns raw activity counters into normalized developer metrics, tracks skill
usage trends over time and benchmarks a developer against a peer population.

Rate metrics (commits/week, PRs/month, reviews/week) are zero whenever no
active weeks are known; the calculator never produces NaN or infinities.
Quality, collaboration and impact estimates that cannot be derived from raw
counters are taken as-is from the caller.
"""

from __future__ import annotations

from collections.abc import Sequence

from analytics.models import (
    ActivityInput,
    Benchmark,
    DeveloperMetrics,
    MetricsLike,
    SkillTrend,
    SkillTrendPoint,
    TrendData,
    metric_values,
)
from analytics.numeric import percentile_of, rank_of, safe_divide
from devmetrics.config import Settings, get_settings
from devmetrics.logging_config import get_logger
from devmetrics.metrics import CALCULATION_DURATION

logger = get_logger(__name__)

# Average weeks in a month (365.25 days / 12 months / 7 days)
WEEKS_PER_MONTH = 365.25 / 12 / 7


def _quarter(point: SkillTrendPoint) -> str:
    return f"{point.date.year}-Q{(point.date.month - 1) // 3 + 1}"


class MetricsCalculator:
    """Computes per-developer metrics, skill trends and peer benchmarks."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    @CALCULATION_DURATION.labels(operation="developer_metrics").time()
    def calculate_developer_metrics(self, activity: ActivityInput) -> DeveloperMetrics:
        """Calculate the full metric set for one developer.

        Args:
            activity: Raw counters plus any upstream quality/impact estimates

        Returns:
            DeveloperMetrics with every field finite and non-negative
        """
        weeks = activity.weeks_active

        metrics = DeveloperMetrics(
            # Activity
            commit_frequency=safe_divide(activity.commits, weeks),
            pr_velocity=safe_divide(activity.prs, weeks) * WEEKS_PER_MONTH,
            issue_resolution_rate=safe_divide(activity.resolved_issues, activity.issues) * 100,
            code_review_participation=safe_divide(activity.reviews, weeks),
            # Quality
            code_quality_score=activity.code_quality_score,
            test_coverage_average=activity.test_coverage_average,
            documentation_score=activity.documentation_score,
            bug_rate=activity.bug_rate,
            # Collaboration
            collaboration_score=activity.collaboration_score,
            mentorship_activity=activity.mentorship_activity,
            community_engagement=activity.community_engagement,
            # Growth
            skill_diversity=len(set(activity.languages)),
            learning_velocity=activity.learning_velocity,
            project_complexity=activity.project_complexity,
            # Impact
            repo_stars=activity.stars,
            forks=activity.forks,
            dependents=activity.dependents,
            downloads=activity.downloads,
        )

        logger.debug(
            "developer_metrics_calculated",
            weeks_active=weeks,
            commit_frequency=round(metrics.commit_frequency, 2),
            skill_diversity=metrics.skill_diversity,
        )
        return metrics

    @CALCULATION_DURATION.labels(operation="skill_trends").time()
    def calculate_skill_trends(self, history: Sequence[SkillTrendPoint]) -> list[SkillTrend]:
        """Summarize usage history into one trend per skill.

        Skills are reported in the order they first appear in ``history``.
        Growth is the usage change from the earliest to the latest
        observation, so a single observation has zero growth.
        """
        grouped: dict[str, list[SkillTrendPoint]] = {}
        for point in history:
            grouped.setdefault(point.skill, []).append(point)

        trends: list[SkillTrend] = []
        for skill, points in grouped.items():
            ordered = sorted(points, key=lambda p: p.date)
            growth = ordered[-1].usage - ordered[0].usage if len(ordered) >= 2 else 0.0

            trends.append(
                SkillTrend(
                    skill=skill,
                    category=points[0].category,
                    proficiency_growth=growth,
                    usage_over_time=self._quarterly_usage(ordered),
                    market_demand=self._market_demand(skill),
                    future_projection=self._project_growth(growth),
                )
            )

        logger.debug("skill_trends_calculated", skills=len(trends), points=len(history))
        return trends

    @CALCULATION_DURATION.labels(operation="benchmarks").time()
    def calculate_benchmarks(
        self,
        user_metrics: MetricsLike,
        peer_metrics: Sequence[MetricsLike],
    ) -> dict[str, Benchmark]:
        """Percentile and rank of each of the user's metrics among peers.

        Peers lacking a metric are left out of that metric's population. A
        metric no peer carries is benchmarked as percentile 100, rank 1.
        """
        user_values = metric_values(user_metrics)
        peer_values = [metric_values(peer) for peer in peer_metrics]

        benchmarks: dict[str, Benchmark] = {}
        for key, value in user_values.items():
            population = [peer[key] for peer in peer_values if key in peer]
            benchmarks[key] = Benchmark(
                percentile=percentile_of(value, population),
                rank=rank_of(value, population),
            )

        logger.debug(
            "benchmarks_calculated",
            metrics=len(benchmarks),
            peers=len(peer_values),
        )
        return benchmarks

    def generate_insights(
        self,
        metrics: MetricsLike,
        trends: Sequence[SkillTrend],
    ) -> list[str]:
        """Short free-text observations about a developer's metrics.

        Each rule adds at most one message. Metrics absent from ``metrics``
        never trigger a rule.
        """
        values = metric_values(metrics)
        insights: list[str] = []

        commit_frequency = values.get("commit_frequency")
        if commit_frequency is not None:
            if commit_frequency > 20:
                insights.append(
                    "Exceptional commit frequency! You're in the top 10% of active developers."
                )
            elif commit_frequency < 5:
                insights.append(
                    "Consider increasing your commit frequency for better visibility."
                )

        quality = values.get("code_quality_score")
        if quality is not None:
            if quality > 80:
                insights.append(
                    "Outstanding code quality! Your PR review rate suggests high standards."
                )
            elif quality < 60:
                insights.append(
                    "Consider investing in code quality: more tests and reviews pay off."
                )

        reviews = values.get("code_review_participation")
        if reviews is not None:
            if reviews > 2:
                insights.append(
                    "Great collaboration! You actively contribute to team code reviews."
                )
            elif reviews < 1:
                insights.append(
                    "Consider more collaboration through regular code reviews."
                )

        diversity = values.get("skill_diversity")
        if diversity is not None:
            if diversity > 5:
                insights.append(
                    "Impressive skill diversity! You're proficient in multiple technologies."
                )
            elif diversity < 3:
                insights.append("Consider exploring new languages to broaden your skill set.")

        stars = values.get("repo_stars")
        if stars is not None:
            if stars > 100:
                insights.append(
                    "Strong community impact! Your projects have significant traction."
                )
            elif stars < 10:
                insights.append(
                    "Consider sharing more open source work to grow your community impact."
                )

        threshold = self._settings.rapid_growth_threshold
        growing = [t.skill for t in trends if t.proficiency_growth >= threshold]
        if growing:
            insights.append(f"Rapid growth in {', '.join(growing)}!")

        return insights

    # --- helpers ---

    @staticmethod
    def _quarterly_usage(ordered: Sequence[SkillTrendPoint]) -> list[TrendData]:
        """Average usage per calendar quarter with change vs. the prior quarter."""
        quarters: dict[str, list[float]] = {}
        for point in ordered:
            quarters.setdefault(_quarter(point), []).append(point.usage)

        trend_data: list[TrendData] = []
        previous = 0.0
        for period in sorted(quarters):
            usages = quarters[period]
            value = sum(usages) / len(usages)
            change = (value - previous) / previous * 100 if previous > 0 else 0.0
            trend_data.append(TrendData(period=period, value=round(value), change=round(change)))
            previous = value
        return trend_data

    def _market_demand(self, skill: str) -> float:
        high_demand = {s.lower() for s in self._settings.high_demand_skills}
        if skill.lower() in high_demand:
            return self._settings.high_demand_score
        return self._settings.default_demand_score

    def _project_growth(self, growth: float) -> float:
        return max(0.0, min(100.0, growth * self._settings.projection_factor))
