"""Lifecycle contract for long-running analyzer modules."""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional

from ..utils.logging import get_logger


class BaseModule(ABC):
    """A module that is started once, beats while it works, and reports health.

    Subclasses set ``health_status`` as they move through their lifecycle and
    call ``heartbeat()`` whenever they complete a unit of work.
    """

    def __init__(self, name: str):
        self.name = name
        self.running = False
        self.health_status = "initialized"
        self.started_at: Optional[datetime] = None
        self.last_heartbeat: Optional[datetime] = None
        self.last_error: Optional[str] = None
        self.logger = get_logger(f"module.{name}")

    @abstractmethod
    async def start(self) -> None: ...

    @abstractmethod
    async def stop(self) -> None: ...

    @abstractmethod
    async def health_check(self) -> dict:
        """Return ``{"status": str, "details": dict}``."""
        ...

    def mark_started(self) -> None:
        self.running = True
        self.health_status = "running"
        self.started_at = datetime.now(timezone.utc)
        self.heartbeat()

    def mark_stopped(self) -> None:
        self.running = False
        self.health_status = "stopped"

    def heartbeat(self) -> None:
        self.last_heartbeat = datetime.now(timezone.utc)

    def record_error(self, error: str) -> None:
        self.last_error = error

    @property
    def uptime_seconds(self) -> Optional[float]:
        if not self.running or self.started_at is None:
            return None
        return round((datetime.now(timezone.utc) - self.started_at).total_seconds(), 1)

    def get_status(self) -> dict:
        return {
            "name": self.name,
            "running": self.running,
            "health_status": self.health_status,
            "uptime_seconds": self.uptime_seconds,
            "last_heartbeat": self.last_heartbeat.isoformat() if self.last_heartbeat else None,
            "last_error": self.last_error,
        }
