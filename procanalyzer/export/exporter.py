"""Report exporter — serializes the analysis history to a JSON report file."""

import asyncio
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ..engine.analysis_engine import AnalysisEngine
from ..utils.logging import get_logger
from .contracts import AnalysisReport, AnalysisSummary, AnomalyEntry, AnomalyStats, RecommendationEntry

logger = get_logger("export.exporter")

REPORT_PREFIX = "process-analysis-report"


def report_filename(now: Optional[datetime] = None) -> str:
    """``process-analysis-report-<YYYY-MM-DD>.json``"""
    now = now or datetime.now(timezone.utc)
    return f"{REPORT_PREFIX}-{now.date().isoformat()}.json"


class ReportExporter:
    """Builds an AnalysisReport from an engine's history and writes it to disk."""

    def __init__(self, export_dir: str = "exports") -> None:
        self._export_dir = export_dir

    @property
    def export_dir(self) -> str:
        return self._export_dir

    def _ensure_export_dir(self) -> None:
        """Create the export directory if it does not exist."""
        Path(self._export_dir).mkdir(parents=True, exist_ok=True)

    def build_report(
        self,
        engine: AnalysisEngine,
        tick_interval: float,
        now: Optional[datetime] = None,
    ) -> AnalysisReport:
        summary = AnalysisSummary.from_history(engine.summarize())
        stats = engine.anomaly_stats()

        return AnalysisReport(
            generated_at=now or datetime.now(timezone.utc),
            monitoring_duration_seconds=summary.system_health_summary.samples * tick_interval,
            system_health_summary=summary.system_health_summary,
            process_statistics=summary.process_statistics,
            anomalies_detected=AnomalyStats(
                total_detected=stats["total_detected"],
                recent=[
                    AnomalyEntry(
                        pid=a.pid,
                        process_name=a.process_name,
                        score=a.score,
                        reason=a.reason,
                    )
                    for a in stats["recent"]
                ],
            ),
            recommendations=[
                RecommendationEntry(kind=r.kind.value, message=r.message)
                for r in engine.recent_recommendations()
            ],
        )

    async def write_report(
        self,
        engine: AnalysisEngine,
        tick_interval: float,
        now: Optional[datetime] = None,
    ) -> str:
        """Write the report JSON and return its path."""
        now = now or datetime.now(timezone.utc)
        report = self.build_report(engine, tick_interval, now=now)
        path = str(Path(self._export_dir) / report_filename(now))
        self._ensure_export_dir()

        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._write_json, path, report.to_json_dict())

        logger.info(
            "report_exported",
            file_path=path,
            samples=report.system_health_summary.samples,
            anomalies=report.anomalies_detected.total_detected,
        )
        return path

    # ── File writing helpers ───────────────────────────────────────────────

    @staticmethod
    def _write_json(path: str, payload: dict) -> None:
        """Write the report dictionary to a JSON file."""
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, default=str)
