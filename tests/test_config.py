"""Tests for AnalyzerConfig defaults and validation."""

import pytest
from pydantic import ValidationError

from procanalyzer.config import AnalyzerConfig


def _config(**overrides):
    return AnalyzerConfig(_env_file=None, **overrides)


class TestAnalyzerConfig:
    def test_defaults(self):
        config = _config()
        assert config.tick_interval_seconds == 2.0
        assert config.anomaly_threshold == 0.8
        assert config.history_capacity == 100
        assert config.max_recommendations == 5
        assert config.log_limit is None
        assert config.telemetry_source == "psutil"

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("PROCANALYZER_TELEMETRY_SOURCE", "simulated")
        monkeypatch.setenv("PROCANALYZER_HISTORY_CAPACITY", "25")
        config = _config()
        assert config.telemetry_source == "simulated"
        assert config.history_capacity == 25

    def test_unknown_telemetry_source(self):
        with pytest.raises(ValidationError):
            _config(telemetry_source="wmi")

    @pytest.mark.parametrize("threshold", [-0.1, 1.5])
    def test_threshold_range(self, threshold):
        with pytest.raises(ValidationError):
            _config(anomaly_threshold=threshold)

    def test_interval_must_be_positive(self):
        with pytest.raises(ValidationError):
            _config(tick_interval_seconds=0)

    @pytest.mark.parametrize("field", ["history_capacity", "max_recommendations", "process_limit"])
    def test_counts_must_be_positive(self, field):
        with pytest.raises(ValidationError):
            _config(**{field: 0})

    def test_log_limit_must_cover_tail_views(self):
        with pytest.raises(ValidationError):
            _config(log_limit=5)
        assert _config(log_limit=20).log_limit == 20
