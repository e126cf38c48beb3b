"""Master API router — includes all sub-routers."""

from fastapi import APIRouter

from .routes.analysis import router as analysis_router
from .routes.export import router as export_router
from .routes.monitor import router as monitor_router
from .websockets.events import router as ws_router

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(analysis_router)
api_router.include_router(monitor_router)
api_router.include_router(export_router)

# WebSocket router is mounted at root level (no prefix)
websocket_router = ws_router
