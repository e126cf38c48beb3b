"""Shared test fixtures."""

from datetime import datetime, timezone

import pytest

from procanalyzer.config import AnalyzerConfig
from procanalyzer.models import ProcessSnapshot, ProcessStatus, SystemSnapshot
from procanalyzer.telemetry.provider import TelemetryError, TelemetryProvider, TelemetrySample

FIXED_TS = datetime(2026, 2, 7, 12, 0, 0, tzinfo=timezone.utc)


def make_process(pid=1000, name="python.exe", cpu=10.0, memory=10.0, memory_mb=128,
                 status=ProcessStatus.RUNNING):
    """Create a ProcessSnapshot with quiet defaults."""
    return ProcessSnapshot(
        pid=pid,
        name=name,
        cpu_percent=cpu,
        memory_percent=memory,
        memory_mb=memory_mb,
        status=status,
    )


def make_system(cpu=40.0, memory=50.0, total=180, ts=FIXED_TS):
    """Create a SystemSnapshot with quiet defaults."""
    return SystemSnapshot(
        cpu_usage_percent=cpu,
        memory_usage_percent=memory,
        total_processes=total,
        timestamp=ts,
    )


class StaticProvider(TelemetryProvider):
    """Returns queued samples in order, raising any queued exception."""

    name = "static"

    def __init__(self, samples):
        self._samples = list(samples)
        self.calls = 0

    async def collect(self) -> TelemetrySample:
        self.calls += 1
        if not self._samples:
            raise TelemetryError("no more samples")
        item = self._samples.pop(0) if len(self._samples) > 1 else self._samples[0]
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def config():
    return AnalyzerConfig(
        _env_file=None,
        tick_interval_seconds=0.01,
        telemetry_timeout_seconds=1.0,
        log_dir="test_logs",
    )


@pytest.fixture
def quiet_sample():
    """A tick with nothing worth reporting."""
    return TelemetrySample(
        system=make_system(),
        processes=(
            make_process(pid=100, name="chrome.exe", cpu=20.0, memory=15.0),
            make_process(pid=200, name="explorer.exe", cpu=5.0, memory=3.0),
        ),
    )


@pytest.fixture
def busy_sample():
    """A tick with one process far above its host's CPU."""
    return TelemetrySample(
        system=make_system(cpu=30.0),
        processes=(
            make_process(pid=300, name="miner.exe", cpu=95.0, memory=85.0),
            make_process(pid=100, name="chrome.exe", cpu=20.0, memory=15.0),
        ),
    )


@pytest.fixture
def static_provider():
    """Factory for providers that replay the given samples (or exceptions)."""
    return StaticProvider
