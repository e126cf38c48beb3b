"""Runtime modules package."""

from .base_module import BaseModule
from .process_monitor import ProcessMonitor

__all__ = [
    "BaseModule",
    "ProcessMonitor",
]
