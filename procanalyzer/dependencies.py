"""FastAPI dependency providers.

Every runtime object lives on ``app.state`` and is built by ``create_app``, so
separate app instances never share an engine.
"""

from fastapi import HTTPException, Request, status

from .config import AnalyzerConfig
from .export.exporter import ReportExporter
from .modules.process_monitor import ProcessMonitor


def get_app_config(request: Request) -> AnalyzerConfig:
    return request.app.state.config


def get_process_monitor(request: Request) -> ProcessMonitor:
    monitor = getattr(request.app.state, "monitor", None)
    if monitor is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Monitor not initialized")
    return monitor


def get_report_exporter(request: Request) -> ReportExporter:
    return request.app.state.exporter
