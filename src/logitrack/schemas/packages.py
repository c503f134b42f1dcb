"""Package API schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.domain import PackageStatus, Priority


class PackageCreate(BaseModel):
    weight: float = Field(..., ge=0, allow_inf_nan=False)
    origin: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)
    status: PackageStatus = PackageStatus.IN_WAREHOUSE
    priority: Priority = Priority.STANDARD
    customer_phone: str = Field(..., min_length=1)


class RerouteRequest(BaseModel):
    new_destination: str = Field(..., min_length=1)


class PackageModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    weight: float
    origin: str
    destination: str
    status: PackageStatus
    priority: Priority
    customer_phone: str
    created_time: datetime
    warehouse_id: Optional[int] = None
    route_id: Optional[int] = None
    delivered_time: Optional[datetime] = None


class DeliveryEstimateModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    package_id: int
    priority: Priority
    seconds: int
