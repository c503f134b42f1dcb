"""Delivery report endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..deps import get_registry
from ...persistence.filesystem import FileStorage
from ...schemas.reports import DeliveryReportResponse, ReportEntryModel
from ...services.registry import Registry, report_window
from ...services.reports import export_delivery_report

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/deliveries", response_model=DeliveryReportResponse)
def get_delivery_report(
  month: int = Query(..., ge=1, le=12, description="Month number (1-12)"),
  year: int = Query(..., ge=1970, description="Four digit year"),
  persist: bool = Query(default=False, description="Also write JSON/CSV exports to the data root"),
  registry: Registry = Depends(get_registry),
) -> DeliveryReportResponse:
  entries = registry.generate_delivery_report(month, year)
  window_start, window_end = report_window(
    month,
    year,
    days_per_month=registry.config.report_days_per_month,
    days_per_year=registry.config.report_days_per_year,
  )

  output_dir = None
  if persist:
    try:
      output_dir = str(export_delivery_report(
        entries, month, year, storage=FileStorage(root=registry.config.data_root)
      ))
    except OSError as exc:
      raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to export delivery report: {exc}",
      ) from exc

  return DeliveryReportResponse(
    month=month,
    year=year,
    window_start=window_start,
    window_end=window_end,
    entries=[ReportEntryModel.model_validate(entry) for entry in entries],
    output_dir=output_dir,
  )
