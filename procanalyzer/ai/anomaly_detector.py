"""Anomaly Detector — additive, rule-weighted scoring of process snapshots.

Each process is scored against the live system snapshot. Rule weights are
summed and the total is clamped to 1.0; processes whose score strictly exceeds
the anomaly threshold are reported as anomalies with a human-readable reason.
"""

from ..models import AnomalyRecord, ProcessSnapshot, SystemSnapshot, clamp_percent
from ..utils.logging import get_logger

logger = get_logger("ai.anomaly_detector")

DEFAULT_ANOMALY_THRESHOLD = 0.8

# Weights are integer hundredths so tier sums compare exactly against thresholds.
CPU_EXTREME_PCT, CPU_EXTREME_POINTS = 90.0, 40
CPU_HIGH_PCT, CPU_HIGH_POINTS = 70.0, 20
MEMORY_HIGH_PCT, MEMORY_HIGH_POINTS = 80.0, 30
MEMORY_ELEVATED_PCT, MEMORY_ELEVATED_POINTS = 60.0, 15
SPIKE_FACTOR, SPIKE_POINTS = 2.0, 30
MAX_POINTS = 100

REASON_CPU_EXTREME = "Extremely high CPU usage"
REASON_CPU_HIGH = "High CPU usage"
REASON_MEMORY_HIGH = "High memory consumption"
REASON_CPU_SPIKE = "CPU usage spike"


def score_points(cpu_percent: float, memory_percent: float, system_cpu_percent: float) -> int:
    """Return the clamped score in hundredths (0-100)."""
    cpu = clamp_percent(cpu_percent)
    memory = clamp_percent(memory_percent)
    system_cpu = clamp_percent(system_cpu_percent)

    points = 0
    if cpu > CPU_EXTREME_PCT:
        points += CPU_EXTREME_POINTS
    elif cpu > CPU_HIGH_PCT:
        points += CPU_HIGH_POINTS

    if memory > MEMORY_HIGH_PCT:
        points += MEMORY_HIGH_POINTS
    elif memory > MEMORY_ELEVATED_PCT:
        points += MEMORY_ELEVATED_POINTS

    if cpu > system_cpu * SPIKE_FACTOR:
        points += SPIKE_POINTS

    return min(points, MAX_POINTS)


def anomaly_score(cpu_percent: float, memory_percent: float, system_cpu_percent: float) -> float:
    """Anomaly score in [0, 1] for the given process and system CPU values."""
    return score_points(cpu_percent, memory_percent, system_cpu_percent) / 100


class AnomalyDetector:
    """Scores processes against system context and flags anomalies above a threshold.

    When a history store is attached, every detected anomaly is appended to
    its anomaly log.
    """

    def __init__(self, threshold: float = DEFAULT_ANOMALY_THRESHOLD, history=None):
        self.threshold = threshold
        self._history = history

    def attach_history(self, history) -> None:
        """Attach the history store that receives detected anomalies."""
        self._history = history

    def score(self, process: ProcessSnapshot, system: SystemSnapshot) -> float:
        return anomaly_score(process.cpu_percent, process.memory_percent, system.cpu_usage_percent)

    def reasons(self, process: ProcessSnapshot, system: SystemSnapshot) -> list[str]:
        """Triggered-rule phrases in fixed order: CPU tier, memory, spike.

        The elevated memory tier contributes to the score but has no phrase.
        """
        cpu = clamp_percent(process.cpu_percent)
        memory = clamp_percent(process.memory_percent)
        system_cpu = clamp_percent(system.cpu_usage_percent)

        reasons = []
        if cpu > CPU_EXTREME_PCT:
            reasons.append(REASON_CPU_EXTREME)
        elif cpu > CPU_HIGH_PCT:
            reasons.append(REASON_CPU_HIGH)

        if memory > MEMORY_HIGH_PCT:
            reasons.append(REASON_MEMORY_HIGH)
        if cpu > system_cpu * SPIKE_FACTOR:
            reasons.append(REASON_CPU_SPIKE)
        return reasons

    def detect(self, processes, system: SystemSnapshot) -> list[AnomalyRecord]:
        """Return an AnomalyRecord for every process whose score exceeds the threshold."""
        anomalies = []
        for process in processes:
            score = self.score(process, system)
            if score > self.threshold:
                anomalies.append(AnomalyRecord(
                    pid=process.pid,
                    process_name=process.name,
                    score=score,
                    reason=", ".join(self.reasons(process, system)),
                ))

        if anomalies:
            logger.debug("anomalies_detected", count=len(anomalies), threshold=self.threshold)
        if self._history is not None:
            self._history.append_anomalies(anomalies)
        return anomalies
