"""Process Analyzer rule layer — anomaly scoring, classification, recommendations, and alerts."""

from .alert_engine import AlertEngine
from .anomaly_detector import AnomalyDetector, anomaly_score
from .health_scorer import HealthScorer
from .process_classifier import ProcessClassifier
from .recommendation_engine import RecommendationEngine

__all__ = [
    "AlertEngine",
    "AnomalyDetector",
    "HealthScorer",
    "ProcessClassifier",
    "RecommendationEngine",
    "anomaly_score",
]
