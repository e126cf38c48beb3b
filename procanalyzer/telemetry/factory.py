"""Build the telemetry provider selected in configuration."""

from ..config import AnalyzerConfig
from .provider import TelemetryProvider


def create_provider(config: AnalyzerConfig) -> TelemetryProvider:
    if config.telemetry_source == "simulated":
        from .simulated import SimulatedTelemetryProvider
        return SimulatedTelemetryProvider(
            seed=config.simulated_seed,
            process_count=config.simulated_process_count,
        )

    from .psutil_provider import PsutilTelemetryProvider
    return PsutilTelemetryProvider(process_limit=config.process_limit)
