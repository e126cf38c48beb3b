"""Immutable value records shared by the analysis engine and its collaborators."""

from .analysis import (
    Alert,
    AnalysisResult,
    AnomalyRecord,
    ClassificationLabel,
    HealthStatus,
    HistoryEntry,
    ProcessClassification,
    Recommendation,
    RecommendationKind,
    Severity,
    SystemHealth,
    TickUpdate,
)
from .snapshot import ProcessSnapshot, ProcessStatus, SystemSnapshot, clamp_percent

__all__ = [
    "Alert",
    "AnalysisResult",
    "AnomalyRecord",
    "ClassificationLabel",
    "HealthStatus",
    "HistoryEntry",
    "ProcessClassification",
    "ProcessSnapshot",
    "ProcessStatus",
    "Recommendation",
    "RecommendationKind",
    "Severity",
    "SystemHealth",
    "SystemSnapshot",
    "TickUpdate",
    "clamp_percent",
]
