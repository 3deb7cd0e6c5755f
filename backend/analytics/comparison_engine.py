"""Developer Comparison & Benchmarking Engine.

Compares developers metric by metric, ranks cohorts by a weighted composite
score, finds developers with similar metric profiles and positions a
developer within a peer population.

The composite score normalizes each weighted metric with a saturating curve
before weighting, so stars or downloads in the thousands cannot drown out
rates measured in single digits. Both sides of a comparison are always scored
over the same metric set with the same weights.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any, Union

from analytics.metrics_calculator import MetricsCalculator
from analytics.models import (
    ComparisonResult,
    CompetitiveInsight,
    DeveloperProfile,
    MetricComparison,
    MetricsLike,
    OverallScore,
    Position,
    RankedDeveloper,
    Significance,
    SimilarityMatch,
    Strengths,
    Winner,
    format_metric_name,
    metric_values,
)
from analytics.numeric import median, normalized_distance, relative_gap, saturate, weighted_average
from devmetrics.config import Settings, get_settings
from devmetrics.exceptions import NoComparableMetricsError
from devmetrics.logging_config import get_logger
from devmetrics.metrics import CALCULATION_DURATION, COMPARISONS_TOTAL

logger = get_logger(__name__)

ProfileLike = Union[DeveloperProfile, Mapping[str, Any]]

# Recommendations for metrics where a developer trails the peer median
UNDERPERFORMING_ADVICE: dict[str, str] = {
    "commit_frequency": "Increase daily coding activity and maintain consistency",
    "code_quality_score": "Focus on code reviews and testing to improve quality",
    "collaboration_score": "Participate more in code reviews and team discussions",
    "code_review_participation": "Review more pull requests to raise your participation",
    "issue_resolution_rate": "Close out open issues to improve your resolution rate",
    "skill_diversity": "Pick up a new language or framework to broaden your stack",
    "repo_stars": "Polish and promote your best repositories to grow their reach",
}

OUTPERFORMING_ADVICE: dict[str, str] = {
    "skill_diversity": "Leverage your polyglot expertise in diverse projects",
    "repo_stars": "Build on your OSS success with more community projects",
}


def _as_profile(developer: ProfileLike) -> DeveloperProfile:
    if isinstance(developer, DeveloperProfile):
        return developer
    return DeveloperProfile.model_validate(developer)


class ComparisonEngine:
    """Pairwise comparison, ranking, similarity and competitive positioning."""

    def __init__(
        self,
        settings: Settings | None = None,
        calculator: MetricsCalculator | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self.calculator = calculator or MetricsCalculator(self._settings)

    # --- scoring ---

    def composite_score(self, metrics: MetricsLike) -> float:
        """Weighted composite score in ``[0, 100)`` over the metrics present."""
        return self._score_values(metric_values(metrics))

    def _score_values(self, values: Mapping[str, float]) -> float:
        references = self._settings.composite_references
        normalized = {
            key: saturate(value, references[key])
            for key, value in values.items()
            if key in references
        }
        return round(weighted_average(normalized, self._settings.composite_weights), 2)

    def _significance(self, a: float, b: float) -> Significance:
        gap = relative_gap(a, b)
        if gap >= self._settings.significance_high:
            return Significance.HIGH
        if gap >= self._settings.significance_medium:
            return Significance.MEDIUM
        return Significance.LOW

    # --- pairwise ---

    @CALCULATION_DURATION.labels(operation="compare").time()
    def compare_developers(self, user1: ProfileLike, user2: ProfileLike) -> ComparisonResult:
        """Compare two developers across every metric they both carry.

        Raises:
            NoComparableMetricsError: If the two metric sets share no key.
        """
        profile1 = _as_profile(user1)
        profile2 = _as_profile(user2)
        values1 = metric_values(profile1.metrics)
        values2 = metric_values(profile2.metrics)

        common = [key for key in values1 if key in values2]
        if not common:
            logger.warning(
                "comparison_without_shared_metrics",
                left=len(values1),
                right=len(values2),
            )
            raise NoComparableMetricsError(list(values1), list(values2))

        comparisons = [
            self._compare_metric(key, values1[key], values2[key]) for key in common
        ]

        score1 = self._score_values({key: values1[key] for key in common})
        score2 = self._score_values({key: values2[key] for key in common})
        if abs(score1 - score2) < self._settings.overall_tie_margin:
            overall_winner = Winner.TIE
        else:
            overall_winner = Winner.USER1 if score1 > score2 else Winner.USER2

        strengths = Strengths(
            user1=[
                c.metric
                for c in comparisons
                if c.winner == Winner.USER1 and c.significance != Significance.LOW
            ],
            user2=[
                c.metric
                for c in comparisons
                if c.winner == Winner.USER2 and c.significance != Significance.LOW
            ],
        )

        COMPARISONS_TOTAL.labels(outcome=overall_winner.value).inc()
        logger.debug(
            "developers_compared",
            metrics=len(comparisons),
            score1=score1,
            score2=score2,
        )

        return ComparisonResult(
            user1=profile1,
            user2=profile2,
            comparisons=comparisons,
            overall_score=OverallScore(user1=score1, user2=score2, winner=overall_winner),
            strengths=strengths,
            recommendations=self._recommendations(comparisons),
        )

    def _compare_metric(self, key: str, value1: float, value2: float) -> MetricComparison:
        difference = value1 - value2
        if value2 != 0:
            percentage_diff = difference / value2 * 100
        else:
            percentage_diff = 100.0 if value1 > 0 else 0.0

        if math.isclose(value1, value2, rel_tol=1e-9, abs_tol=1e-9):
            winner = Winner.TIE
        else:
            winner = Winner.USER1 if value1 > value2 else Winner.USER2

        return MetricComparison(
            metric=key,
            user1_value=value1,
            user2_value=value2,
            difference=difference,
            percentage_diff=percentage_diff,
            winner=winner,
            significance=self._significance(value1, value2),
        )

    def _recommendations(self, comparisons: Sequence[MetricComparison]) -> list[str]:
        """Advice for the first developer based on the metrics they lose."""
        recommendations: list[str] = []
        behind = {c.metric: c for c in comparisons if c.winner == Winner.USER2}

        for comparison in behind.values():
            if comparison.significance == Significance.HIGH:
                name = format_metric_name(comparison.metric).lower()
                recommendations.append(f"Focus on {name} to improve competitiveness")
                break

        if "collaboration_score" in behind:
            recommendations.append("Increase code review participation and community engagement")
        if "code_quality_score" in behind:
            recommendations.append("Focus on code quality and testing practices")

        return recommendations[: self._settings.max_recommendations]

    # --- cohorts ---

    @CALCULATION_DURATION.labels(operation="rank").time()
    def rank_developers(self, developers: Sequence[ProfileLike]) -> list[RankedDeveloper]:
        """Rank developers by composite score, best first.

        Equal scores keep their input order.
        """
        profiles = [_as_profile(d) for d in developers]
        scored = [(profile, self.composite_score(profile.metrics)) for profile in profiles]
        scored.sort(key=lambda item: item[1], reverse=True)

        return [
            RankedDeveloper(
                id=profile.id,
                name=profile.name,
                metrics=profile.metrics,
                score=score,
                rank=index + 1,
            )
            for index, (profile, score) in enumerate(scored)
        ]

    @CALCULATION_DURATION.labels(operation="similarity").time()
    def find_similar_developers(
        self,
        target: MetricsLike,
        candidates: Sequence[ProfileLike],
        top_n: int | None = None,
    ) -> list[SimilarityMatch]:
        """Return up to ``top_n`` candidates ordered by similarity to ``target``.

        Similarity is ``1 - normalized distance`` over shared metrics, in
        ``[0, 1]``. Matching areas are the metrics within the configured
        tolerance of the target's own value.
        """
        limit = self._settings.default_top_n if top_n is None else top_n
        if limit <= 0:
            return []

        target_values = metric_values(target)
        tolerance = self._settings.matching_tolerance

        matches: list[SimilarityMatch] = []
        for candidate in candidates:
            profile = _as_profile(candidate)
            candidate_values = metric_values(profile.metrics)

            distance = normalized_distance(target_values, candidate_values)
            similarity = 0.0 if distance is None else max(0.0, min(1.0, 1 - distance))

            matching_areas = [
                key
                for key, value in target_values.items()
                if key in candidate_values
                and abs(value - candidate_values[key]) <= tolerance * abs(value)
            ]

            matches.append(
                SimilarityMatch(
                    id=profile.id,
                    name=profile.name,
                    similarity=round(similarity, 4),
                    matching_areas=matching_areas,
                )
            )

        matches.sort(key=lambda m: m.similarity, reverse=True)
        return matches[:limit]

    @CALCULATION_DURATION.labels(operation="competitive").time()
    def generate_competitive_insights(
        self,
        subject: MetricsLike,
        peers: Sequence[MetricsLike],
    ) -> CompetitiveInsight:
        """Position a developer within a peer population.

        The overall percentile is the mean of the per-metric benchmark
        percentiles, taken over the metrics on which at least one peer differs
        from the subject. With no such metric the result is that of an empty
        peer group. Areas are judged against the peer median of each metric.

        Raises:
            NoComparableMetricsError: If ``subject`` carries no metrics.
        """
        subject_values = metric_values(subject)
        if not subject_values:
            raise NoComparableMetricsError(left_keys=[])

        benchmarks = self.calculator.calculate_benchmarks(subject, peers)
        peer_values = [metric_values(peer) for peer in peers]

        # metrics where everyone holds the subject's value say nothing about position
        separating = [
            benchmark
            for key, benchmark in benchmarks.items()
            if any(key in peer and peer[key] != subject_values[key] for peer in peer_values)
        ]
        if separating:
            percentile = round(sum(b.percentile for b in separating) / len(separating), 2)
        else:
            percentile = 100.0

        outperforming: list[str] = []
        underperforming: list[str] = []
        for key, value in subject_values.items():
            peer_median = median([peer[key] for peer in peer_values if key in peer])
            if peer_median is None:
                continue
            if value > peer_median:
                outperforming.append(key)
            elif value < peer_median:
                underperforming.append(key)

        insight = CompetitiveInsight(
            position=self._position(percentile),
            percentile=percentile,
            outperforming_areas=outperforming,
            underperforming_areas=underperforming,
            actionable_insights=self._actionable_insights(underperforming, outperforming),
        )

        logger.debug(
            "competitive_position_calculated",
            position=insight.position.value,
            percentile=percentile,
            peers=len(peer_values),
        )
        return insight

    def _position(self, percentile: float) -> Position:
        if percentile > self._settings.position_top:
            return Position.TOP
        if percentile > self._settings.position_above_average:
            return Position.ABOVE_AVERAGE
        if percentile > self._settings.position_average:
            return Position.AVERAGE
        return Position.BELOW_AVERAGE

    def _actionable_insights(
        self, underperforming: Sequence[str], outperforming: Sequence[str]
    ) -> list[str]:
        insights = [
            UNDERPERFORMING_ADVICE.get(
                key,
                f"Improve your {format_metric_name(key).lower()} to close the gap with peers",
            )
            for key in underperforming
        ]
        insights.extend(
            OUTPERFORMING_ADVICE[key] for key in outperforming if key in OUTPERFORMING_ADVICE
        )

        if not insights:
            insights.append("Maintain current momentum and explore new technologies")

        return insights[: self._settings.max_recommendations]
