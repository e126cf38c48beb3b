"""Simulated telemetry provider for demos and deterministic runs.

Produces random but plausible host and process readings. A seed makes the
sequence reproducible.
"""

import random
from datetime import datetime, timezone
from typing import Optional

from ..models import ProcessSnapshot, ProcessStatus, SystemSnapshot
from .provider import TelemetryProvider, TelemetrySample

PROCESS_NAMES = [
    "chrome.exe", "node.exe", "code.exe", "mysqld.exe", "python.exe",
    "explorer.exe", "svchost.exe", "winlogon.exe", "csrss.exe", "system",
]
BASE_PID = 1000


class SimulatedTelemetryProvider(TelemetryProvider):
    """Random telemetry, sorted by process CPU like the live provider."""

    name = "simulated"

    def __init__(self, seed: Optional[int] = None, process_count: int = 15):
        self.process_count = process_count
        self._rng = random.Random(seed)

    async def collect(self) -> TelemetrySample:
        return TelemetrySample(system=self._system(), processes=self._processes())

    def _system(self) -> SystemSnapshot:
        return SystemSnapshot.create(
            cpu_usage_percent=self._rng.random() * 100,
            memory_usage_percent=30 + self._rng.random() * 50,
            total_processes=150 + self._rng.randrange(50),
            timestamp=datetime.now(timezone.utc),
        )

    def _processes(self) -> tuple[ProcessSnapshot, ...]:
        processes = []
        for i in range(self.process_count):
            memory = self._rng.random() * 50
            processes.append(ProcessSnapshot.create(
                pid=BASE_PID + i,
                name=self._rng.choice(PROCESS_NAMES),
                cpu_percent=self._rng.random() * 100,
                memory_percent=memory,
                memory_mb=int(memory * 50),
                status=ProcessStatus.RUNNING,
            ))
        processes.sort(key=lambda p: p.cpu_percent, reverse=True)
        return tuple(processes)
