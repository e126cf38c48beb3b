"""Process Analyzer configuration using Pydantic Settings."""

from __future__ import annotations

from typing import Optional

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AnalyzerConfig(BaseSettings):
    """Main configuration class. Loads from .env file and PROCANALYZER_* variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PROCANALYZER_",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Process Analyzer"
    debug: bool = False
    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: str = "http://localhost:5173,http://127.0.0.1:5173"

    # WebSocket feed
    ws_max_connections: int = 100
    ws_queue_size: int = 50
    ws_heartbeat_interval: int = 30

    # Logging
    log_dir: str = "logs"
    log_max_bytes: int = 10_000_000
    log_backup_count: int = 5

    # Scheduling
    tick_interval_seconds: float = 2.0
    autostart_monitor: bool = False

    # Telemetry
    telemetry_source: str = "psutil"  # psutil / simulated
    telemetry_timeout_seconds: float = 5.0
    process_limit: int = 50
    simulated_process_count: int = 15
    simulated_seed: Optional[int] = None

    # Anomaly detection
    anomaly_threshold: float = 0.8
    classifier_baseline_cpu: float = 50.0

    # Recommendations / alerts
    max_recommendations: int = 5

    # History retention
    history_capacity: int = 100
    recent_anomalies_limit: int = 10
    recent_recommendations_limit: int = 20
    performance_points: int = 20
    log_limit: Optional[int] = None  # None keeps anomaly/recommendation logs unbounded

    # Export
    export_dir: str = "exports"

    @field_validator("telemetry_source")
    @classmethod
    def validate_telemetry_source(cls, v: str) -> str:
        allowed = {"psutil", "simulated"}
        if v not in allowed:
            raise ValueError(f"telemetry_source must be one of {allowed}")
        return v

    @field_validator("anomaly_threshold")
    @classmethod
    def validate_anomaly_threshold(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError("anomaly_threshold must be within [0, 1]")
        return v

    @field_validator("tick_interval_seconds")
    @classmethod
    def validate_tick_interval(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("tick_interval_seconds must be positive")
        return v

    @field_validator("history_capacity", "max_recommendations", "process_limit")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("value must be at least 1")
        return v

    @model_validator(mode="after")
    def validate_log_limit(self) -> "AnalyzerConfig":
        # A capped log must still cover both tail views
        if self.log_limit is not None:
            needed = max(self.recent_anomalies_limit, self.recent_recommendations_limit)
            if self.log_limit < needed:
                raise ValueError(f"log_limit must be at least {needed}")
        return self


def get_config() -> AnalyzerConfig:
    """Factory function to create config instance."""
    return AnalyzerConfig()
