"""Analysis results produced once per tick."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from .snapshot import ProcessSnapshot, SystemSnapshot


class RecommendationKind(str, Enum):
    SYSTEM = "system"
    PROCESS = "process"
    SECURITY = "security"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ClassificationLabel(str, Enum):
    NORMAL = "Normal"
    MONITOR = "Monitor"
    WARNING = "Warning"
    CRITICAL = "Critical"


class HealthStatus(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


@dataclass(frozen=True)
class AnomalyRecord:
    pid: int
    process_name: str
    score: float
    reason: str

    def to_dict(self) -> dict:
        return {
            "pid": self.pid,
            "process_name": self.process_name,
            "score": round(self.score, 4),
            "reason": self.reason,
        }


@dataclass(frozen=True)
class Recommendation:
    kind: RecommendationKind
    message: str

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "message": self.message}


@dataclass(frozen=True)
class Alert:
    title: str
    message: str
    severity: Severity

    def to_dict(self) -> dict:
        return {"title": self.title, "message": self.message, "severity": self.severity.value}


@dataclass(frozen=True)
class ProcessClassification:
    """Display status of one process row."""

    pid: int
    label: ClassificationLabel
    is_anomaly: bool
    score: float

    def to_dict(self) -> dict:
        return {
            "pid": self.pid,
            "label": self.label.value,
            "is_anomaly": self.is_anomaly,
            "score": round(self.score, 4),
        }


@dataclass(frozen=True)
class SystemHealth:
    status: HealthStatus
    score: int

    def to_dict(self) -> dict:
        return {"status": self.status.value, "score": self.score}


@dataclass(frozen=True)
class AnalysisResult:
    anomalies: tuple[AnomalyRecord, ...] = ()
    recommendations: tuple[Recommendation, ...] = ()
    alerts: tuple[Alert, ...] = ()

    def to_dict(self) -> dict:
        return {
            "anomalies": [a.to_dict() for a in self.anomalies],
            "recommendations": [r.to_dict() for r in self.recommendations],
            "alerts": [a.to_dict() for a in self.alerts],
        }


@dataclass(frozen=True)
class HistoryEntry:
    timestamp: datetime
    processes: tuple[ProcessSnapshot, ...]
    system: SystemSnapshot
    analysis: AnalysisResult

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp.isoformat(),
            "system": system_to_dict(self.system),
            "process_count": len(self.processes),
            "analysis": self.analysis.to_dict(),
        }


@dataclass(frozen=True)
class TickUpdate:
    """Everything the presentation layer needs to render one tick.

    ``system`` and ``health`` are None when acquisition failed; ``error`` then
    carries the failure message and ``result`` holds the synthetic alert.
    """

    result: AnalysisResult
    system: Optional[SystemSnapshot] = None
    processes: tuple[ProcessSnapshot, ...] = ()
    classifications: tuple[ProcessClassification, ...] = ()
    health: Optional[SystemHealth] = None
    error: Optional[str] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        by_pid = {c.pid: c for c in self.classifications}
        rows = []
        for p in self.processes:
            row = process_to_dict(p)
            c = by_pid.get(p.pid)
            if c is not None:
                row["classification"] = c.label.value
                row["is_anomaly"] = c.is_anomaly
            rows.append(row)
        return {
            "timestamp": self.timestamp.isoformat(),
            "system": system_to_dict(self.system) if self.system else None,
            "health": self.health.to_dict() if self.health else None,
            "processes": rows,
            "analysis": self.result.to_dict(),
            "error": self.error,
        }


def process_to_dict(p: ProcessSnapshot) -> dict:
    return {
        "pid": p.pid,
        "name": p.name,
        "cpu_percent": round(p.cpu_percent, 1),
        "memory_percent": round(p.memory_percent, 1),
        "memory_mb": p.memory_mb,
        "status": p.status.value,
    }


def system_to_dict(s: SystemSnapshot) -> dict:
    return {
        "cpu_usage_percent": round(s.cpu_usage_percent, 1),
        "memory_usage_percent": round(s.memory_usage_percent, 1),
        "total_processes": s.total_processes,
        "timestamp": s.timestamp.isoformat(),
    }
