"""Telemetry acquisition contract consumed by the process monitor."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..models import ProcessSnapshot, SystemSnapshot


class TelemetryError(Exception):
    """Raised when a provider cannot produce a snapshot for the current tick."""


@dataclass(frozen=True)
class TelemetrySample:
    """One system snapshot and the process snapshots observed with it."""

    system: SystemSnapshot
    processes: tuple[ProcessSnapshot, ...]


class TelemetryProvider(ABC):
    """Source of one TelemetrySample per tick."""

    name: str = "provider"

    @abstractmethod
    async def collect(self) -> TelemetrySample:
        """Collect one sample. Raises TelemetryError on failure."""
        ...
