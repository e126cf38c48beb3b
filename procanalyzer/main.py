"""Process Analyzer — presentation service for the analysis engine.

FastAPI entry point. ``create_app`` builds one engine, monitor, exporter and
WebSocket feed per application instance and wires the feed to the monitor as
an observer.
"""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api.router import api_router, websocket_router
from .api.websockets.events import ConnectionManager
from .config import AnalyzerConfig, get_config
from .engine.analysis_engine import AnalysisEngine
from .export.exporter import ReportExporter
from .middleware.error_handler import register_error_handlers
from .middleware.request_id import RequestIDMiddleware
from .modules.process_monitor import ProcessMonitor
from .telemetry.factory import create_provider
from .telemetry.provider import TelemetryProvider
from .utils.logging import get_logger, setup_logging

logger = get_logger("procanalyzer.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown."""
    config: AnalyzerConfig = app.state.config
    monitor: ProcessMonitor = app.state.monitor

    logger.info(
        "procanalyzer_starting",
        host=config.host,
        port=config.port,
        telemetry_source=config.telemetry_source,
        interval=config.tick_interval_seconds,
    )
    if config.autostart_monitor:
        await monitor.start()

    yield

    if monitor.running:
        await monitor.stop()
    await app.state.ws_manager.close_all()
    logger.info("procanalyzer_stopped", ticks=monitor.engine.ticks)


def create_app(
    config: Optional[AnalyzerConfig] = None,
    provider: Optional[TelemetryProvider] = None,
) -> FastAPI:
    """Build a fully wired application instance."""
    config = config or get_config()

    engine = AnalysisEngine(config)
    monitor = ProcessMonitor(provider or create_provider(config), engine=engine, config=config)
    ws_manager = ConnectionManager(
        max_connections=config.ws_max_connections,
        queue_size=config.ws_queue_size,
        heartbeat_interval=config.ws_heartbeat_interval,
    )
    monitor.subscribe(ws_manager.publish_tick)

    app = FastAPI(
        title=config.app_name,
        description="Rule-based process and host telemetry analysis",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.engine = engine
    app.state.monitor = monitor
    app.state.exporter = ReportExporter(export_dir=config.export_dir)
    app.state.ws_manager = ws_manager

    register_error_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in config.cors_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "X-Request-ID"],
    )
    # Added last so it runs first
    app.add_middleware(RequestIDMiddleware)

    app.include_router(api_router)
    app.include_router(websocket_router)

    @app.get("/health")
    async def health():
        return await monitor.health_check()

    return app


def main():
    """Run the Process Analyzer server."""
    config = get_config()
    setup_logging(
        debug=config.debug,
        log_dir=config.log_dir,
        log_max_bytes=config.log_max_bytes,
        log_backup_count=config.log_backup_count,
    )
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level="debug" if config.debug else "info",
    )


if __name__ == "__main__":
    main()
