"""Report export routes."""

from fastapi import APIRouter, Depends

from ...dependencies import get_process_monitor, get_report_exporter
from ...export.exporter import ReportExporter
from ...modules.process_monitor import ProcessMonitor

router = APIRouter(prefix="/export", tags=["export"])


@router.get("/report")
async def get_report(
    monitor: ProcessMonitor = Depends(get_process_monitor),
    exporter: ReportExporter = Depends(get_report_exporter),
):
    """Return the analysis report as JSON without writing it to disk."""
    return exporter.build_report(monitor.engine, monitor.interval).to_json_dict()


@router.post("/report")
async def write_report(
    monitor: ProcessMonitor = Depends(get_process_monitor),
    exporter: ReportExporter = Depends(get_report_exporter),
):
    """Write the analysis report to the export directory."""
    path = await exporter.write_report(monitor.engine, monitor.interval)
    return {"file_path": path}
