"""Tests for AnalysisEngine tick orchestration."""

from datetime import datetime, timezone

import pytest

from procanalyzer.config import AnalyzerConfig
from procanalyzer.engine.analysis_engine import AnalysisEngine
from procanalyzer.engine.history_store import HistoryStore
from procanalyzer.models import (
    ClassificationLabel,
    HealthStatus,
    ProcessSnapshot,
    RecommendationKind,
    Severity,
    SystemSnapshot,
)


def _proc(pid, name="proc.exe", cpu=10.0, mem=10.0):
    return ProcessSnapshot(pid=pid, name=name, cpu_percent=cpu, memory_percent=mem)


def _system(cpu=30.0, mem=50.0, total=150):
    return SystemSnapshot(
        cpu_usage_percent=cpu,
        memory_usage_percent=mem,
        total_processes=total,
        timestamp=datetime(2026, 2, 7, tzinfo=timezone.utc),
    )


@pytest.fixture
def engine():
    return AnalysisEngine(AnalyzerConfig(_env_file=None))


class TestAnalyze:
    def test_quiet_tick(self, engine):
        result = engine.analyze(_system(), [_proc(1), _proc(2)])
        assert result.anomalies == ()
        assert result.recommendations == ()
        assert result.alerts == ()
        assert engine.ticks == 1
        assert len(engine.history) == 1

    def test_extreme_process_flows_through_pipeline(self, engine):
        procs = [_proc(42, "miner.exe", cpu=99.0, mem=85.0), _proc(2)]
        result = engine.analyze(_system(cpu=30.0), procs)

        assert [a.pid for a in result.anomalies] == [42]
        assert [a.title for a in result.alerts] == ["ANOMALIES DETECTED", "PROCESS CRITICAL"]
        assert result.alerts[1].severity == Severity.HIGH

        entry = engine.history.latest
        assert entry.analysis == result
        assert entry.processes == tuple(procs)
        assert engine.history.total_anomalies == 1

    def test_history_shared_when_passed_in(self):
        history = HistoryStore(capacity=3)
        engine = AnalysisEngine(AnalyzerConfig(_env_file=None), history=history)
        for _ in range(5):
            engine.analyze(_system(), [_proc(1)])
        assert engine.history is history
        assert len(history) == 3
        assert engine.ticks == 5

    def test_empty_injected_history_is_kept(self):
        history = HistoryStore(capacity=5, log_limit=20)
        engine = AnalysisEngine(AnalyzerConfig(_env_file=None), history=history)
        assert engine.history is history

        engine.analyze(_system(), [_proc(1, cpu=99.0, mem=90.0)])
        assert len(history) == 1
        assert history.total_anomalies == 1
        assert history.log_limit == 20

    def test_engines_are_independent(self):
        a = AnalysisEngine(AnalyzerConfig(_env_file=None))
        b = AnalysisEngine(AnalyzerConfig(_env_file=None))
        a.analyze(_system(), [_proc(1, cpu=99.0, mem=90.0)])
        assert len(a.history) == 1
        assert len(b.history) == 0
        assert b.history.total_anomalies == 0

    def test_threshold_from_config(self):
        engine = AnalysisEngine(AnalyzerConfig(_env_file=None, anomaly_threshold=0.3))
        result = engine.analyze(_system(cpu=60.0), [_proc(1, cpu=95.0)])
        assert len(result.anomalies) == 1


class TestTickScenarios:
    def test_six_anomalies_give_one_security_recommendation_and_one_alert(self, engine):
        procs = [_proc(i, name=f"worker{i}.exe", cpu=92.0, mem=70.0) for i in range(6)]
        result = engine.analyze(_system(cpu=30.0, mem=50.0), procs)

        assert len(result.anomalies) == 6
        # every anomaly needs cpu > 90, so the high-CPU process rule fires too
        kinds = [r.kind for r in result.recommendations]
        assert kinds == [RecommendationKind.PROCESS, RecommendationKind.SECURITY]
        assert result.recommendations[1].message == (
            "Multiple anomalous processes detected (6). Consider security scan."
        )
        assert len(result.alerts) == 1
        assert result.alerts[0].title == "ANOMALIES DETECTED"
        assert result.alerts[0].message == "6 anomalous processes identified by AI"
        assert result.alerts[0].severity == Severity.MEDIUM

    def test_high_system_cpu_gives_one_system_recommendation(self, engine):
        result = engine.analyze(_system(cpu=85.0, mem=50.0), [_proc(1), _proc(2)])

        assert result.anomalies == ()
        assert result.alerts == ()
        assert len(result.recommendations) == 1
        assert result.recommendations[0].kind == RecommendationKind.SYSTEM
        assert result.recommendations[0].message == (
            "High system CPU usage (85.0%). Consider closing unnecessary applications."
        )


class TestViews:
    def test_failure_result(self, engine):
        result = engine.failure_result("Error collecting system data")
        assert result.anomalies == ()
        assert len(result.alerts) == 1
        assert result.alerts[0].title == "System Alert"
        assert len(engine.history) == 0

    def test_classify_and_health(self, engine):
        labels = engine.classify([_proc(1, cpu=95.0, mem=85.0), _proc(2)])
        assert [c.label for c in labels] == [ClassificationLabel.WARNING, ClassificationLabel.NORMAL]
        assert engine.health(_system(cpu=95.0, mem=50.0)).status == HealthStatus.GOOD

    def test_summary_and_stats(self, engine):
        engine.analyze(_system(cpu=20.0, total=100), [_proc(1, cpu=99.0, mem=90.0)])
        engine.analyze(_system(cpu=40.0, total=200), [_proc(1)])
        summary = engine.summarize()
        assert summary.samples == 2
        assert summary.average_cpu == 30.0
        assert summary.max_concurrent_processes == 200
        assert engine.anomaly_stats()["total_detected"] == 1
        assert len(engine.recent_anomalies()) == 1
        assert len(engine.performance_series()) == 2

    def test_reset(self, engine):
        engine.analyze(_system(), [_proc(1, cpu=99.0, mem=90.0)])
        engine.reset()
        assert engine.ticks == 0
        assert len(engine.history) == 0
        assert engine.recent_anomalies() == []
