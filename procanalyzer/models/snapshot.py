"""Telemetry snapshots — one immutable observation of the host or of a process."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


def clamp_percent(value: float) -> float:
    """Clamp a percentage into [0, 100]."""
    return min(max(float(value), 0.0), 100.0)


class ProcessStatus(str, Enum):
    RUNNING = "Running"
    SLEEPING = "Sleeping"
    IDLE = "Idle"
    STOPPED = "Stopped"
    ZOMBIE = "Zombie"
    UNKNOWN = "Unknown"

    @classmethod
    def from_raw(cls, raw: str | None) -> "ProcessStatus":
        """Map a psutil status string (e.g. "disk-sleep") onto the enum."""
        value = (raw or "").lower()
        if value == "running":
            return cls.RUNNING
        if "sleep" in value or value == "waiting":
            return cls.SLEEPING
        if value in ("idle", "parked"):
            return cls.IDLE
        if value in ("stopped", "tracing-stop", "dead"):
            return cls.STOPPED
        if value == "zombie":
            return cls.ZOMBIE
        return cls.UNKNOWN


@dataclass(frozen=True)
class ProcessSnapshot:
    """One observation of one process."""

    pid: int
    name: str
    cpu_percent: float
    memory_percent: float
    memory_mb: int = 0
    status: ProcessStatus = ProcessStatus.RUNNING

    @classmethod
    def create(
        cls,
        pid: int,
        name: str,
        cpu_percent: float,
        memory_percent: float,
        memory_mb: int = 0,
        status: ProcessStatus = ProcessStatus.RUNNING,
    ) -> "ProcessSnapshot":
        """Build a snapshot with percentages clamped into [0, 100]."""
        return cls(
            pid=int(pid),
            name=name or "",
            cpu_percent=clamp_percent(cpu_percent),
            memory_percent=clamp_percent(memory_percent),
            memory_mb=max(int(memory_mb), 0),
            status=status,
        )


@dataclass(frozen=True)
class SystemSnapshot:
    """One observation of the host."""

    cpu_usage_percent: float
    memory_usage_percent: float
    total_processes: int = 0
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        cpu_usage_percent: float,
        memory_usage_percent: float,
        total_processes: int = 0,
        timestamp: datetime | None = None,
    ) -> "SystemSnapshot":
        """Build a snapshot with percentages clamped into [0, 100]."""
        return cls(
            cpu_usage_percent=clamp_percent(cpu_usage_percent),
            memory_usage_percent=clamp_percent(memory_usage_percent),
            total_processes=max(int(total_processes), 0),
            timestamp=timestamp or datetime.now(timezone.utc),
        )
