"""Route request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.domain import RouteStatus


class RouteCreate(BaseModel):
    origin: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)
    distance_km: float = Field(..., ge=0, allow_inf_nan=False)


class RouteDriverAssignment(BaseModel):
    driver_id: int = Field(..., ge=0)


class RoutePackageAssignment(BaseModel):
    package_id: int = Field(..., ge=0)


class RouteModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    origin: str
    destination: str
    distance_km: float
    estimated_duration: int = Field(..., description="Estimated duration in minutes.")
    assigned_driver: Optional[int] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    status: RouteStatus


class RouteSuggestionModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    origin: str
    destination: str
    waypoints: List[str]
    distance_km: Optional[float] = None
    known_lane: bool
