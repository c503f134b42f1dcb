"""Driver API schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.domain import VehicleType


class DriverCreate(BaseModel):
    name: str = Field(..., min_length=1)
    vehicle_type: VehicleType


class DriverModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    vehicle_type: VehicleType
    is_available: bool
    current_route: Optional[int] = None
    completed_routes: List[int]
