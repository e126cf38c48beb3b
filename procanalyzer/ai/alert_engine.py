"""Alert Engine — severity-tagged alerts recomputed fresh on every tick."""

from ..models import Alert, AnomalyRecord, ProcessSnapshot, Severity, SystemSnapshot

SYSTEM_CPU_CRITICAL_PCT = 95.0
SYSTEM_MEMORY_CRITICAL_PCT = 95.0
PROCESS_CRITICAL_PCT = 95.0

ACQUISITION_ERROR_MESSAGE = "Error collecting system data"


class AlertEngine:
    """Builds the alert list for one tick. No deduplication across ticks."""

    def alert(
        self,
        processes: list[ProcessSnapshot],
        system: SystemSnapshot,
        anomalies: list[AnomalyRecord],
    ) -> list[Alert]:
        alerts = []

        if system.cpu_usage_percent > SYSTEM_CPU_CRITICAL_PCT:
            alerts.append(Alert(
                title="CRITICAL: System CPU Overload",
                message=f"CPU usage at {system.cpu_usage_percent:.1f}% - System may become unresponsive",
                severity=Severity.HIGH,
            ))

        if system.memory_usage_percent > SYSTEM_MEMORY_CRITICAL_PCT:
            alerts.append(Alert(
                title="CRITICAL: Memory Exhaustion",
                message=f"Memory usage at {system.memory_usage_percent:.1f}% - System may crash",
                severity=Severity.HIGH,
            ))

        if anomalies:
            alerts.append(Alert(
                title="ANOMALIES DETECTED",
                message=f"{len(anomalies)} anomalous processes identified by AI",
                severity=Severity.MEDIUM,
            ))

        # One alert per critical process, unbounded
        for process in processes:
            if process.cpu_percent > PROCESS_CRITICAL_PCT or process.memory_percent > PROCESS_CRITICAL_PCT:
                alerts.append(Alert(
                    title="PROCESS CRITICAL",
                    message=f"{process.name} (PID: {process.pid}) using excessive resources",
                    severity=Severity.HIGH,
                ))

        return alerts

    @staticmethod
    def acquisition_failure(message: str = ACQUISITION_ERROR_MESSAGE) -> Alert:
        """Synthetic alert surfaced when telemetry could not be collected."""
        return Alert(title="System Alert", message=message, severity=Severity.HIGH)
