"""Tests for HealthScorer bands."""

from datetime import datetime, timezone

import pytest

from procanalyzer.ai.health_scorer import HealthScorer
from procanalyzer.models import HealthStatus, SystemSnapshot


def _system(cpu, mem):
    return SystemSnapshot(
        cpu_usage_percent=cpu,
        memory_usage_percent=mem,
        timestamp=datetime(2026, 2, 7, tzinfo=timezone.utc),
    )


@pytest.mark.parametrize(
    "cpu,mem,score,status",
    [
        (20.0, 30.0, 100, HealthStatus.EXCELLENT),
        (85.0, 30.0, 80, HealthStatus.EXCELLENT),
        (95.0, 30.0, 60, HealthStatus.GOOD),
        (95.0, 85.0, 40, HealthStatus.FAIR),
        (95.0, 95.0, 20, HealthStatus.POOR),
        (80.0, 80.0, 100, HealthStatus.EXCELLENT),
    ],
)
def test_health_bands(cpu, mem, score, status):
    health = HealthScorer().score(_system(cpu, mem))
    assert health.score == score
    assert health.status == status


def test_to_dict():
    assert HealthScorer().score(_system(10.0, 10.0)).to_dict() == {"status": "Excellent", "score": 100}
