"""Developer analytics report assembly.

Runs the calculator, benchmarks, competitive positioning and insight rules
for one developer and bundles the results into a single immutable report
ready for serialization by the calling application.
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import Field

from analytics.comparison_engine import ComparisonEngine
from analytics.insights_generator import InsightsGenerator
from analytics.metrics_calculator import MetricsCalculator
from analytics.models import (
    ActivityInput,
    Benchmark,
    CompetitiveInsight,
    DeveloperMetrics,
    EngineModel,
    Insight,
    MetricsLike,
    SkillTrend,
    SkillTrendPoint,
    metric_values,
)
from analytics.numeric import growth_rate
from devmetrics.config import Settings, get_settings
from devmetrics.logging_config import get_logger
from devmetrics.metrics import REPORTS_BUILT

logger = get_logger(__name__)


class MetricChange(EngineModel):
    absolute: float
    percentage: float


class DeveloperReport(EngineModel):
    """Everything the engine knows about one developer."""

    id: str
    name: str
    metrics: DeveloperMetrics
    benchmarks: dict[str, Benchmark] = Field(default_factory=dict)
    competitive: CompetitiveInsight
    skill_trends: list[SkillTrend] = Field(default_factory=list)
    insights: list[Insight] = Field(default_factory=list)
    highlights: list[str] = Field(default_factory=list)
    changes: dict[str, MetricChange] = Field(default_factory=dict)


class AnalyticsReport:
    """Facade wiring the engine components together."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self.calculator = MetricsCalculator(self._settings)
        self.comparison = ComparisonEngine(self._settings, self.calculator)
        self.insights = InsightsGenerator()

    def build_developer_report(
        self,
        developer_id: str,
        name: str,
        activity: ActivityInput,
        peers: Sequence[MetricsLike] = (),
        skill_history: Sequence[SkillTrendPoint] = (),
        previous_metrics: MetricsLike | None = None,
    ) -> DeveloperReport:
        """Build a full report for one developer.

        Args:
            developer_id: Caller-side identifier, echoed back
            name: Display name, echoed back
            activity: Raw counters and upstream estimates
            peers: Peer population for benchmarking and positioning
            skill_history: Time-ordered skill usage observations
            previous_metrics: Metrics from an earlier period, for change tracking

        Returns:
            DeveloperReport
        """
        metrics = self.calculator.calculate_developer_metrics(activity)
        trends = self.calculator.calculate_skill_trends(skill_history)

        changes: dict[str, MetricChange] = {}
        if previous_metrics is not None:
            for key, (absolute, percentage) in growth_rate(
                metric_values(metrics), metric_values(previous_metrics)
            ).items():
                changes[key] = MetricChange(absolute=absolute, percentage=percentage)

        report = DeveloperReport(
            id=developer_id,
            name=name,
            metrics=metrics,
            benchmarks=self.calculator.calculate_benchmarks(metrics, peers),
            competitive=self.comparison.generate_competitive_insights(metrics, peers),
            skill_trends=trends,
            insights=self.insights.generate_insights(metrics),
            highlights=self.calculator.generate_insights(metrics, trends),
            changes=changes,
        )

        REPORTS_BUILT.inc()
        logger.info(
            "developer_report_built",
            developer_id=developer_id,
            peers=len(peers),
            position=report.competitive.position.value,
            insights=len(report.insights),
        )
        return report
