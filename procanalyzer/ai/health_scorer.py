"""System health label derived from one system snapshot."""

from ..models import HealthStatus, SystemHealth, SystemSnapshot

# (threshold, penalty) pairs; both tiers apply when both thresholds are exceeded
CPU_PENALTIES = ((80.0, 20), (90.0, 20))
MEMORY_PENALTIES = ((80.0, 20), (90.0, 20))

BANDS = (
    (80, HealthStatus.EXCELLENT),
    (60, HealthStatus.GOOD),
    (40, HealthStatus.FAIR),
)


class HealthScorer:
    def score(self, system: SystemSnapshot) -> SystemHealth:
        score = 100
        for threshold, penalty in CPU_PENALTIES:
            if system.cpu_usage_percent > threshold:
                score -= penalty
        for threshold, penalty in MEMORY_PENALTIES:
            if system.memory_usage_percent > threshold:
                score -= penalty

        for floor, status in BANDS:
            if score >= floor:
                return SystemHealth(status=status, score=score)
        return SystemHealth(status=HealthStatus.POOR, score=score)
