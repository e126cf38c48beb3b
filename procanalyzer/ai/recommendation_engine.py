"""Recommendation Engine — operator-facing advice from system and process conditions.

Rules are evaluated in a fixed order and the first ``limit`` results are
returned; they are not sorted by severity, so a full list silently drops the
later rules.
"""

from ..models import AnomalyRecord, ProcessSnapshot, Recommendation, RecommendationKind, SystemSnapshot
from ..utils.logging import get_logger

logger = get_logger("ai.recommendation_engine")

DEFAULT_LIMIT = 5
SYSTEM_CPU_PCT = 80.0
SYSTEM_MEMORY_PCT = 85.0
PROCESS_HIGH_CPU_PCT = 80.0
HIGH_CPU_PROCESS_COUNT = 3
ANOMALY_COUNT = 5


class RecommendationEngine:
    """Derives at most ``limit`` recommendations per tick."""

    def __init__(self, limit: int = DEFAULT_LIMIT, history=None):
        self.limit = limit
        self._history = history

    def attach_history(self, history) -> None:
        """Attach the history store that receives every generated recommendation."""
        self._history = history

    def evaluate(
        self,
        processes: list[ProcessSnapshot],
        system: SystemSnapshot,
        anomalies: list[AnomalyRecord],
    ) -> list[Recommendation]:
        """Every recommendation whose rule triggers, in rule order, untruncated."""
        recommendations = []

        if system.cpu_usage_percent > SYSTEM_CPU_PCT:
            recommendations.append(Recommendation(
                kind=RecommendationKind.SYSTEM,
                message=(
                    f"High system CPU usage ({system.cpu_usage_percent:.1f}%). "
                    "Consider closing unnecessary applications."
                ),
            ))

        if system.memory_usage_percent > SYSTEM_MEMORY_PCT:
            recommendations.append(Recommendation(
                kind=RecommendationKind.SYSTEM,
                message=(
                    f"High memory usage ({system.memory_usage_percent:.1f}%). "
                    "Consider adding more RAM or closing memory-intensive applications."
                ),
            ))

        high_cpu = [p for p in processes if p.cpu_percent > PROCESS_HIGH_CPU_PCT]
        if len(high_cpu) > HIGH_CPU_PROCESS_COUNT:
            recommendations.append(Recommendation(
                kind=RecommendationKind.PROCESS,
                message=(
                    f"Multiple processes ({len(high_cpu)}) using high CPU. "
                    "Investigate potential resource conflicts."
                ),
            ))

        if len(anomalies) > ANOMALY_COUNT:
            recommendations.append(Recommendation(
                kind=RecommendationKind.SECURITY,
                message=(
                    f"Multiple anomalous processes detected ({len(anomalies)}). "
                    "Consider security scan."
                ),
            ))

        return recommendations

    def recommend(
        self,
        processes: list[ProcessSnapshot],
        system: SystemSnapshot,
        anomalies: list[AnomalyRecord],
    ) -> list[Recommendation]:
        recommendations = self.evaluate(processes, system, anomalies)
        # The log receives the full list; only the returned view is truncated
        if self._history is not None:
            self._history.append_recommendations(recommendations)
        if len(recommendations) > self.limit:
            logger.debug("recommendations_truncated", generated=len(recommendations), limit=self.limit)
        return recommendations[: self.limit]
