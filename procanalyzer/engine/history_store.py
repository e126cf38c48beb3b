"""History Store — bounded retention of tick results for summaries and export.

Holds a FIFO ring of HistoryEntry values plus two append-only logs (detected
anomalies and generated recommendations) that are only ever read through tail
views.
"""

from collections import deque
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..models import AnomalyRecord, HistoryEntry, Recommendation
from ..utils.logging import get_logger

logger = get_logger("engine.history_store")

DEFAULT_CAPACITY = 100
RECENT_ANOMALIES = 10
RECENT_RECOMMENDATIONS = 20
PERFORMANCE_POINTS = 20


@dataclass(frozen=True)
class HistorySummary:
    """Aggregates over the retained window. Averages and peaks are None when empty."""

    samples: int
    average_cpu: Optional[float]
    average_memory: Optional[float]
    peak_cpu: Optional[float]
    peak_memory: Optional[float]
    total_processes_monitored: int
    average_processes: Optional[float]
    max_concurrent_processes: Optional[int]
    total_anomalies: int
    total_recommendations: int


class HistoryStore:
    """Bounded history ring plus anomaly and recommendation logs.

    Args:
        capacity: Maximum retained HistoryEntry count; the oldest is evicted first.
        log_limit: Cap for the two logs. None keeps them unbounded.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY, log_limit: Optional[int] = None):
        self.capacity = capacity
        self.log_limit = log_limit
        self._entries: deque[HistoryEntry] = deque(maxlen=capacity)
        self._anomaly_log: deque[AnomalyRecord] = deque(maxlen=log_limit)
        self._recommendation_log: deque[Recommendation] = deque(maxlen=log_limit)
        # Lifetime counts survive log capping
        self._anomalies_total = 0
        self._recommendations_total = 0

    def __len__(self) -> int:
        return len(self._entries)

    # --- Recording ---

    def record(self, entry: HistoryEntry) -> None:
        evicting = len(self._entries) == self.capacity
        self._entries.append(entry)
        if evicting:
            logger.debug("history_entry_evicted", capacity=self.capacity)

    def append_anomalies(self, anomalies) -> None:
        anomalies = list(anomalies)
        self._anomaly_log.extend(anomalies)
        self._anomalies_total += len(anomalies)

    def append_recommendations(self, recommendations) -> None:
        recommendations = list(recommendations)
        self._recommendation_log.extend(recommendations)
        self._recommendations_total += len(recommendations)

    def clear(self) -> None:
        self._entries.clear()
        self._anomaly_log.clear()
        self._recommendation_log.clear()
        self._anomalies_total = 0
        self._recommendations_total = 0

    # --- Views ---

    @property
    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    @property
    def latest(self) -> Optional[HistoryEntry]:
        return self._entries[-1] if self._entries else None

    def get_history(self, limit: int = DEFAULT_CAPACITY) -> list[HistoryEntry]:
        history = list(self._entries)
        return history[-limit:] if limit > 0 else []

    def recent_anomalies(self, n: int = RECENT_ANOMALIES) -> list[AnomalyRecord]:
        return _tail(self._anomaly_log, n)

    def recent_recommendations(self, n: int = RECENT_RECOMMENDATIONS) -> list[Recommendation]:
        return _tail(self._recommendation_log, n)

    @property
    def total_anomalies(self) -> int:
        return self._anomalies_total

    @property
    def total_recommendations(self) -> int:
        return self._recommendations_total

    def anomaly_stats(self, n: int = RECENT_ANOMALIES) -> dict:
        """Total anomalies detected plus the last ``n`` records."""
        return {
            "total_detected": self._anomalies_total,
            "recent": self.recent_anomalies(n),
        }

    def performance_series(self, limit: int = PERFORMANCE_POINTS) -> list[dict]:
        """Last ``limit`` (timestamp, cpu, memory) points for charting."""
        return [
            {
                "timestamp": e.system.timestamp.isoformat(),
                "cpu_usage_percent": e.system.cpu_usage_percent,
                "memory_usage_percent": e.system.memory_usage_percent,
            }
            for e in self.get_history(limit)
        ]

    def summarize(self) -> HistorySummary:
        """Mean and max of system CPU/memory and process counts over the retained window."""
        entries = list(self._entries)
        if not entries:
            return HistorySummary(
                samples=0,
                average_cpu=None,
                average_memory=None,
                peak_cpu=None,
                peak_memory=None,
                total_processes_monitored=0,
                average_processes=None,
                max_concurrent_processes=None,
                total_anomalies=self._anomalies_total,
                total_recommendations=self._recommendations_total,
            )

        cpu = np.array([e.system.cpu_usage_percent for e in entries], dtype=np.float64)
        memory = np.array([e.system.memory_usage_percent for e in entries], dtype=np.float64)
        procs = np.array([e.system.total_processes for e in entries], dtype=np.int64)

        return HistorySummary(
            samples=len(entries),
            average_cpu=round(float(cpu.mean()), 2),
            average_memory=round(float(memory.mean()), 2),
            peak_cpu=round(float(cpu.max()), 2),
            peak_memory=round(float(memory.max()), 2),
            total_processes_monitored=len(entries),
            average_processes=round(float(procs.mean()), 2),
            max_concurrent_processes=int(procs.max()),
            total_anomalies=self._anomalies_total,
            total_recommendations=self._recommendations_total,
        )


def _tail(log: deque, n: int) -> list:
    if n <= 0:
        return []
    items = list(log)
    return items[-n:]
