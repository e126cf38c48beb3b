"""Analysis result routes — latest tick, history views, and summaries."""

from fastapi import APIRouter, Depends, HTTPException, Query

from ...dependencies import get_process_monitor
from ...export.contracts import AnalysisSummary
from ...modules.process_monitor import ProcessMonitor

router = APIRouter(prefix="/analysis", tags=["analysis"])


@router.get("/current")
async def get_current_analysis(monitor: ProcessMonitor = Depends(get_process_monitor)):
    """Latest tick: system snapshot, health, classified processes, and analysis."""
    update = monitor.get_current()
    if update is None:
        raise HTTPException(status_code=404, detail="No tick has completed yet")
    return update.to_dict()


@router.get("/processes")
async def get_processes(monitor: ProcessMonitor = Depends(get_process_monitor)):
    """Process table rows of the latest tick with their display classification."""
    update = monitor.get_current()
    if update is None:
        return []
    return update.to_dict()["processes"]


@router.get("/history")
async def get_history(
    limit: int = Query(20, ge=1, le=100),
    monitor: ProcessMonitor = Depends(get_process_monitor),
):
    """Retained history entries, oldest first."""
    return [e.to_dict() for e in monitor.engine.history.get_history(limit=limit)]


@router.get("/summary")
async def get_summary(monitor: ProcessMonitor = Depends(get_process_monitor)):
    """Averages and peaks over the retained history window."""
    return AnalysisSummary.from_history(monitor.engine.summarize()).to_json_dict()


@router.get("/anomalies")
async def get_recent_anomalies(monitor: ProcessMonitor = Depends(get_process_monitor)):
    stats = monitor.engine.anomaly_stats()
    return {
        "total_detected": stats["total_detected"],
        "recent": [a.to_dict() for a in stats["recent"]],
    }


@router.get("/recommendations")
async def get_recent_recommendations(monitor: ProcessMonitor = Depends(get_process_monitor)):
    return [r.to_dict() for r in monitor.engine.recent_recommendations()]


@router.get("/performance")
async def get_performance(monitor: ProcessMonitor = Depends(get_process_monitor)):
    """CPU/memory chart series over the most recent ticks."""
    return monitor.engine.performance_series()
