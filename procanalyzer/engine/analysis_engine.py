"""Analysis Engine — runs one tick of the rule pipeline over a telemetry snapshot.

detect -> recommend -> alert, then the tick is recorded in the history store.
Each engine instance owns its own history, so several engines can run side by
side and a single tick can be analyzed without any scheduler.
"""

from datetime import datetime, timezone
from typing import Optional

from ..ai import AlertEngine, AnomalyDetector, HealthScorer, ProcessClassifier, RecommendationEngine
from ..config import AnalyzerConfig
from ..models import (
    AnalysisResult,
    HistoryEntry,
    ProcessClassification,
    SystemHealth,
    SystemSnapshot,
)
from ..utils.logging import get_logger
from .history_store import HistoryStore, HistorySummary

logger = get_logger("engine.analysis")


class AnalysisEngine:
    """Orchestrates the detector, recommendation engine, and alert engine."""

    def __init__(
        self,
        config: Optional[AnalyzerConfig] = None,
        history: Optional[HistoryStore] = None,
    ):
        cfg = config or AnalyzerConfig()
        self.config = cfg
        if history is None:
            history = HistoryStore(capacity=cfg.history_capacity, log_limit=cfg.log_limit)
        self.history = history

        self.detector = AnomalyDetector(threshold=cfg.anomaly_threshold, history=self.history)
        self.classifier = ProcessClassifier(baseline_cpu=cfg.classifier_baseline_cpu)
        self.recommender = RecommendationEngine(limit=cfg.max_recommendations, history=self.history)
        self.alerter = AlertEngine()
        self.health_scorer = HealthScorer()

        self._ticks = 0

    @property
    def ticks(self) -> int:
        return self._ticks

    def analyze(self, system: SystemSnapshot, processes) -> AnalysisResult:
        """Analyze one snapshot and record it in history."""
        processes = tuple(processes)

        anomalies = self.detector.detect(processes, system)
        recommendations = self.recommender.recommend(list(processes), system, anomalies)
        alerts = self.alerter.alert(list(processes), system, anomalies)

        result = AnalysisResult(
            anomalies=tuple(anomalies),
            recommendations=tuple(recommendations),
            alerts=tuple(alerts),
        )
        self.history.record(HistoryEntry(
            timestamp=datetime.now(timezone.utc),
            processes=processes,
            system=system,
            analysis=result,
        ))
        self._ticks += 1

        logger.debug(
            "tick_analyzed",
            processes=len(processes),
            anomalies=len(anomalies),
            recommendations=len(recommendations),
            alerts=len(alerts),
        )
        return result

    def failure_result(self, message: str) -> AnalysisResult:
        """Result surfaced for a tick whose telemetry could not be collected."""
        return AnalysisResult(alerts=(self.alerter.acquisition_failure(message),))

    def classify(self, processes) -> list[ProcessClassification]:
        return self.classifier.classify_all(processes)

    def health(self, system: SystemSnapshot) -> SystemHealth:
        return self.health_scorer.score(system)

    # --- History views ---

    def summarize(self) -> HistorySummary:
        return self.history.summarize()

    def anomaly_stats(self) -> dict:
        return self.history.anomaly_stats(self.config.recent_anomalies_limit)

    def recent_anomalies(self) -> list:
        return self.history.recent_anomalies(self.config.recent_anomalies_limit)

    def recent_recommendations(self) -> list:
        return self.history.recent_recommendations(self.config.recent_recommendations_limit)

    def performance_series(self) -> list[dict]:
        return self.history.performance_series(self.config.performance_points)

    def reset(self) -> None:
        self.history.clear()
        self._ticks = 0
