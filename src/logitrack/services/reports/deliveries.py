"""Serializers and export for monthly delivery reports."""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Sequence

from ...models.domain import ReportEntry
from ...persistence.filesystem import FileStorage

logger = logging.getLogger(__name__)


def _iso(value) -> str | None:
    return value.isoformat() if value is not None else None


def delivery_report_to_json(entries: Sequence[ReportEntry], month: int, year: int) -> dict:
    return {
        "month": month,
        "year": year,
        "package_count": len(entries),
        "entries": [
            {
                "package_id": entry.package_id,
                "delivered_time": _iso(entry.delivered_time),
                "completed_time": _iso(entry.completed_time),
            }
            for entry in entries
        ],
    }


def delivery_report_to_csv(entries: Sequence[ReportEntry]) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=["package_id", "delivered_time", "completed_time"])
    writer.writeheader()
    for entry in entries:
        writer.writerow(
            {
                "package_id": entry.package_id,
                "delivered_time": _iso(entry.delivered_time),
                "completed_time": _iso(entry.completed_time) or "",
            }
        )
    return buffer.getvalue()


def export_delivery_report(
    entries: Sequence[ReportEntry],
    month: int,
    year: int,
    *,
    storage: FileStorage | None = None,
) -> Path:
    """Write summary.json and report.csv into a fresh run directory."""
    storage = storage or FileStorage()
    run_dir = storage.make_run_directory(prefix=f"deliveries_{year}{month:02d}")
    storage.write_json(run_dir / "summary.json", delivery_report_to_json(entries, month, year))
    storage.write_csv(run_dir / "report.csv", delivery_report_to_csv(entries))
    logger.info("Exported delivery report %02d/%s to %s", month, year, run_dir)
    return run_dir
