"""Process Monitor Module — drives the analysis engine from a telemetry provider.

On every scheduler tick the monitor collects one telemetry sample, runs the
analysis engine over it, and hands a TickUpdate to every subscribed observer.
A failed or timed-out collection is not retried: the tick degrades to a single
high-severity alert and the schedule carries on.
"""

import asyncio
import inspect
from typing import Any, Callable, Optional

from ..ai.alert_engine import ACQUISITION_ERROR_MESSAGE
from ..config import AnalyzerConfig
from ..engine.analysis_engine import AnalysisEngine
from ..engine.scheduler import TickCallback, TickScheduler
from ..models import TickUpdate
from ..telemetry.provider import TelemetryError, TelemetryProvider
from .base_module import BaseModule

Observer = Callable[[TickUpdate], Any]
SchedulerFactory = Callable[[float, TickCallback], TickScheduler]

OBSERVER_TIMEOUT = 5.0


class ProcessMonitor(BaseModule):
    """Runs one analysis tick per scheduler interval and publishes the results."""

    def __init__(
        self,
        provider: TelemetryProvider,
        engine: Optional[AnalysisEngine] = None,
        config: Optional[AnalyzerConfig] = None,
        scheduler_factory: SchedulerFactory = TickScheduler,
    ):
        super().__init__(name="process_monitor")

        cfg = config or (engine.config if engine else AnalyzerConfig())
        self.config = cfg
        self.engine = engine or AnalysisEngine(cfg)
        self._provider = provider
        self._collect_timeout: float = cfg.telemetry_timeout_seconds
        self._scheduler = scheduler_factory(cfg.tick_interval_seconds, self._scheduled_tick)

        self._observers: list[Observer] = []
        # Serializes scheduled and manual ticks
        self._tick_lock = asyncio.Lock()
        self._current: Optional[TickUpdate] = None
        self._collection_failures = 0

    # --- Observer interface ---

    def subscribe(self, observer: Observer) -> None:
        """Register a callback (plain or async) that receives every TickUpdate."""
        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    # --- Lifecycle ---

    async def start(self) -> None:
        if self._scheduler.running:
            return
        self.logger.info("process_monitor_starting", provider=self._provider.name)
        self.mark_started()
        await self._scheduler.start()
        self.logger.info("process_monitor_started", interval=self._scheduler.interval)

    async def stop(self) -> None:
        await self._scheduler.stop()
        self.mark_stopped()
        self.logger.info("process_monitor_stopped", ticks=self.engine.ticks)

    async def health_check(self) -> dict:
        self.heartbeat()
        return {
            "status": self.health_status,
            "details": {
                "provider": self._provider.name,
                "ticks": self.engine.ticks,
                "history_entries": len(self.engine.history),
                "collection_failures": self._collection_failures,
                "observers": len(self._observers),
                "interval": self._scheduler.interval,
            },
        }

    # --- Tick handling ---

    async def _scheduled_tick(self) -> None:
        await self.tick()

    async def tick(self) -> TickUpdate:
        """Run one full pipeline pass: collect, analyze, record, publish.

        Ticks never overlap; a manual tick waits for an in-flight scheduled one.
        """
        async with self._tick_lock:
            return await self._run_tick()

    async def _run_tick(self) -> TickUpdate:
        try:
            sample = await asyncio.wait_for(self._provider.collect(), timeout=self._collect_timeout)
        except asyncio.TimeoutError:
            update = self._failed_update(TelemetryError(f"collection timed out after {self._collect_timeout}s"))
        except Exception as e:
            update = self._failed_update(e)
        else:
            result = self.engine.analyze(sample.system, sample.processes)
            update = TickUpdate(
                result=result,
                system=sample.system,
                processes=sample.processes,
                classifications=tuple(self.engine.classify(sample.processes)),
                health=self.engine.health(sample.system),
                timestamp=sample.system.timestamp,
            )

        self._current = update
        self.heartbeat()
        await self._notify(update)
        return update

    def _failed_update(self, error: Exception) -> TickUpdate:
        self._collection_failures += 1
        self.record_error(str(error) or type(error).__name__)
        self.logger.error(
            "telemetry_collection_failed",
            provider=self._provider.name,
            error=str(error),
            failures=self._collection_failures,
        )
        return TickUpdate(
            result=self.engine.failure_result(ACQUISITION_ERROR_MESSAGE),
            error=str(error) or type(error).__name__,
        )

    async def _notify(self, update: TickUpdate) -> None:
        for observer in list(self._observers):
            try:
                outcome = observer(update)
                if inspect.isawaitable(outcome):
                    await asyncio.wait_for(outcome, timeout=OBSERVER_TIMEOUT)
            except asyncio.TimeoutError:
                self.logger.warning("observer_timeout")
            except Exception as e:
                self.logger.error("observer_failed", error=str(e))

    # --- Public API ---

    @property
    def interval(self) -> float:
        return self._scheduler.interval

    @property
    def collection_failures(self) -> int:
        return self._collection_failures

    def get_current(self) -> Optional[TickUpdate]:
        return self._current
