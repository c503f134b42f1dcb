import csv
import json
from datetime import datetime, timezone
from pathlib import Path

from logitrack.models.domain import ReportEntry
from logitrack.persistence.filesystem import FileStorage
from logitrack.services.reports import delivery_report_to_csv, export_delivery_report


def test_file_storage_creates_run_directory(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)
    run_dir = storage.make_run_directory(prefix="deliveries_test")

    assert run_dir.exists()
    assert run_dir.is_dir()
    assert run_dir.parent == tmp_path / "outputs"


def test_file_storage_writes_json_and_csv(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)
    run_dir = storage.make_run_directory(prefix="deliveries_test")

    summary_path = run_dir / "summary.json"
    report_path = run_dir / "report.csv"

    storage.write_json(summary_path, {"hello": "world"})
    storage.write_csv(report_path, "a,b\n1,2\n")

    assert summary_path.read_text(encoding="utf-8") == '{\n  "hello": "world"\n}'
    assert report_path.read_text(encoding="utf-8") == "a,b\n1,2\n"


def test_export_delivery_report(tmp_path: Path) -> None:
    created = datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc)
    completed = datetime(2024, 3, 2, 17, 30, tzinfo=timezone.utc)
    entries = [
        ReportEntry(package_id=3, delivered_time=created, completed_time=completed),
        ReportEntry(package_id=5, delivered_time=created),
    ]

    run_dir = export_delivery_report(entries, 3, 2024, storage=FileStorage(root=tmp_path))

    assert run_dir.name.startswith("deliveries_202403_")
    summary = json.loads((run_dir / "summary.json").read_text(encoding="utf-8"))
    assert summary["package_count"] == 2
    assert summary["entries"][0] == {
        "package_id": 3,
        "delivered_time": created.isoformat(),
        "completed_time": completed.isoformat(),
    }
    assert summary["entries"][1]["completed_time"] is None

    with (run_dir / "report.csv").open(encoding="utf-8", newline="") as handle:
        rows = list(csv.DictReader(handle))
    assert [row["package_id"] for row in rows] == ["3", "5"]
    assert rows[1]["completed_time"] == ""


def test_empty_report_csv_has_header_only() -> None:
    assert delivery_report_to_csv([]).splitlines() == ["package_id,delivered_time,completed_time"]
