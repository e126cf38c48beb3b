"""Process Classifier — per-process display status for the process table.

Scores each process against a fixed baseline system CPU value instead of the
live system snapshot, so a row can read "Normal" while the same process is in
the detector's anomaly list (and the reverse).
"""

from ..models import ClassificationLabel, ProcessClassification, ProcessSnapshot
from .anomaly_detector import anomaly_score

BASELINE_SYSTEM_CPU = 50.0
CRITICAL_SCORE = 0.8
WARNING_SCORE = 0.6
MONITOR_PCT = 80.0


class ProcessClassifier:
    """Maps a process onto Normal / Monitor / Warning / Critical."""

    def __init__(self, baseline_cpu: float = BASELINE_SYSTEM_CPU):
        self.baseline_cpu = baseline_cpu

    def classify(self, process: ProcessSnapshot) -> ProcessClassification:
        score = anomaly_score(process.cpu_percent, process.memory_percent, self.baseline_cpu)

        if score > CRITICAL_SCORE:
            label, is_anomaly = ClassificationLabel.CRITICAL, True
        elif score > WARNING_SCORE:
            label, is_anomaly = ClassificationLabel.WARNING, True
        elif process.cpu_percent > MONITOR_PCT or process.memory_percent > MONITOR_PCT:
            label, is_anomaly = ClassificationLabel.MONITOR, False
        else:
            label, is_anomaly = ClassificationLabel.NORMAL, False

        return ProcessClassification(pid=process.pid, label=label, is_anomaly=is_anomaly, score=score)

    def classify_all(self, processes) -> list[ProcessClassification]:
        return [self.classify(p) for p in processes]
