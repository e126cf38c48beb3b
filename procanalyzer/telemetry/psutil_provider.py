"""psutil-backed telemetry provider.

Collects host CPU/memory and the busiest processes. Collection is blocking, so
it runs in the default executor to keep the event loop free.
"""

import asyncio
from datetime import datetime, timezone

import psutil

from ..models import ProcessSnapshot, ProcessStatus, SystemSnapshot
from ..utils.logging import get_logger
from .provider import TelemetryError, TelemetryProvider, TelemetrySample

logger = get_logger("telemetry.psutil")

PROCESS_ATTRS = ["pid", "name", "cpu_percent", "memory_percent", "memory_info", "status"]


class PsutilTelemetryProvider(TelemetryProvider):
    """Reads live telemetry from the local host."""

    name = "psutil"

    def __init__(self, process_limit: int = 50):
        self.process_limit = process_limit
        self._cpu_count = psutil.cpu_count(logical=True) or 1
        # First cpu_percent(None) call always reports 0.0; prime it
        try:
            psutil.cpu_percent(interval=None)
        except Exception as e:
            logger.debug("cpu_percent_warmup_failed", error=str(e))

    async def collect(self) -> TelemetrySample:
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, self._collect_sample)
        except TelemetryError:
            raise
        except Exception as e:
            raise TelemetryError(f"psutil collection failed: {e}") from e

    def _collect_sample(self) -> TelemetrySample:
        system = self._collect_system()
        processes = self._collect_processes()
        return TelemetrySample(system=system, processes=processes)

    def _collect_system(self) -> SystemSnapshot:
        cpu = psutil.cpu_percent(interval=None)
        mem = psutil.virtual_memory()
        return SystemSnapshot.create(
            cpu_usage_percent=cpu,
            memory_usage_percent=mem.percent,
            total_processes=len(psutil.pids()),
            timestamp=datetime.now(timezone.utc),
        )

    def _collect_processes(self) -> tuple[ProcessSnapshot, ...]:
        rows = []
        for proc in psutil.process_iter(attrs=PROCESS_ATTRS):
            try:
                info = proc.info
                # Per-process CPU is reported per core; normalise to the whole host
                cpu = (info.get("cpu_percent") or 0.0) / self._cpu_count
                mem_info = info.get("memory_info")
                rss_mb = int(mem_info.rss / (1024 ** 2)) if mem_info else 0
                rows.append(ProcessSnapshot.create(
                    pid=info["pid"],
                    name=info.get("name") or "",
                    cpu_percent=cpu,
                    memory_percent=info.get("memory_percent") or 0.0,
                    memory_mb=rss_mb,
                    status=ProcessStatus.from_raw(info.get("status")),
                ))
            except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
                continue

        rows.sort(key=lambda p: p.cpu_percent, reverse=True)
        return tuple(rows[: self.process_limit])
