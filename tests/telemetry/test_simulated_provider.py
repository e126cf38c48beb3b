"""Tests for the simulated telemetry provider and provider factory."""

import pytest

from procanalyzer.config import AnalyzerConfig
from procanalyzer.telemetry.factory import create_provider
from procanalyzer.telemetry.simulated import PROCESS_NAMES, SimulatedTelemetryProvider


class TestSimulatedProvider:
    @pytest.mark.asyncio
    async def test_seed_is_deterministic(self):
        a = await SimulatedTelemetryProvider(seed=7).collect()
        b = await SimulatedTelemetryProvider(seed=7).collect()
        assert a.system.cpu_usage_percent == b.system.cpu_usage_percent
        assert [(p.pid, p.name, p.cpu_percent) for p in a.processes] == \
               [(p.pid, p.name, p.cpu_percent) for p in b.processes]

    @pytest.mark.asyncio
    async def test_values_within_ranges(self):
        provider = SimulatedTelemetryProvider(seed=1, process_count=20)
        for _ in range(10):
            sample = await provider.collect()
            assert 0.0 <= sample.system.cpu_usage_percent <= 100.0
            assert 30.0 <= sample.system.memory_usage_percent <= 80.0
            assert 150 <= sample.system.total_processes < 200
            assert len(sample.processes) == 20
            for p in sample.processes:
                assert p.name in PROCESS_NAMES
                assert 0.0 <= p.cpu_percent <= 100.0
                assert 0.0 <= p.memory_percent <= 50.0

    @pytest.mark.asyncio
    async def test_sorted_by_cpu(self):
        sample = await SimulatedTelemetryProvider(seed=3).collect()
        cpus = [p.cpu_percent for p in sample.processes]
        assert cpus == sorted(cpus, reverse=True)


class TestFactory:
    def test_simulated_source(self):
        config = AnalyzerConfig(_env_file=None, telemetry_source="simulated", simulated_process_count=4)
        provider = create_provider(config)
        assert isinstance(provider, SimulatedTelemetryProvider)
        assert provider.process_count == 4

    def test_psutil_source(self):
        provider = create_provider(AnalyzerConfig(_env_file=None, process_limit=7))
        assert provider.name == "psutil"
        assert provider.process_limit == 7
