"""Delivery report API schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class ReportEntryModel(BaseModel):
  model_config = ConfigDict(from_attributes=True)

  package_id: int
  delivered_time: datetime
  completed_time: Optional[datetime] = None


class DeliveryReportResponse(BaseModel):
  month: int
  year: int
  window_start: datetime
  window_end: datetime
  entries: List[ReportEntryModel]
  output_dir: Optional[str] = None
