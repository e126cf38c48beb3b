"""Export contracts — Pydantic models defining the analysis report shape.

Fields serialize with camelCase aliases (``generatedAt``, ``peakCpu`` ...).
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _ReportModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class SystemHealthSummary(_ReportModel):
    samples: int = 0
    average_cpu: Optional[float] = None
    average_memory: Optional[float] = None
    peak_cpu: Optional[float] = None
    peak_memory: Optional[float] = None


class ProcessStatistics(_ReportModel):
    total_processes_monitored: int = 0
    average_processes: Optional[float] = None
    max_concurrent_processes: Optional[int] = None


class AnomalyEntry(_ReportModel):
    pid: int
    process_name: str
    score: float
    reason: str


class AnomalyStats(_ReportModel):
    total_detected: int = 0
    recent: list[AnomalyEntry] = []


class RecommendationEntry(_ReportModel):
    kind: str
    message: str


class AnalysisReport(_ReportModel):
    generated_at: datetime
    monitoring_duration_seconds: float
    system_health_summary: SystemHealthSummary
    process_statistics: ProcessStatistics
    anomalies_detected: AnomalyStats
    recommendations: list[RecommendationEntry] = []


class AnalysisSummary(_ReportModel):
    """Aggregates over the retained history, as served by ``/analysis/summary``."""

    system_health_summary: SystemHealthSummary
    process_statistics: ProcessStatistics
    total_anomalies: int = 0
    total_recommendations: int = 0

    @classmethod
    def from_history(cls, summary) -> "AnalysisSummary":
        return cls(
            system_health_summary=SystemHealthSummary(
                samples=summary.samples,
                average_cpu=summary.average_cpu,
                average_memory=summary.average_memory,
                peak_cpu=summary.peak_cpu,
                peak_memory=summary.peak_memory,
            ),
            process_statistics=ProcessStatistics(
                total_processes_monitored=summary.total_processes_monitored,
                average_processes=summary.average_processes,
                max_concurrent_processes=summary.max_concurrent_processes,
            ),
            total_anomalies=summary.total_anomalies,
            total_recommendations=summary.total_recommendations,
        )
