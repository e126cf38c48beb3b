"""Monitor control routes — start, stop, and status of the tick schedule."""

from fastapi import APIRouter, Depends

from ...dependencies import get_process_monitor
from ...modules.process_monitor import ProcessMonitor

router = APIRouter(prefix="/monitor", tags=["monitor"])


@router.get("/status")
async def get_monitor_status(monitor: ProcessMonitor = Depends(get_process_monitor)):
    status = monitor.get_status()
    status.update(await monitor.health_check())
    return status


@router.post("/start")
async def start_monitor(monitor: ProcessMonitor = Depends(get_process_monitor)):
    await monitor.start()
    return monitor.get_status()


@router.post("/stop")
async def stop_monitor(monitor: ProcessMonitor = Depends(get_process_monitor)):
    await monitor.stop()
    return monitor.get_status()


@router.post("/tick")
async def run_single_tick(monitor: ProcessMonitor = Depends(get_process_monitor)):
    """Run one analysis tick outside the schedule."""
    update = await monitor.tick()
    return update.to_dict()
