"""Warehouse API schemas."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class WarehouseCreate(BaseModel):
    location: str = Field(..., min_length=1)
    capacity: int = Field(..., ge=0, description="Maximum number of packages the warehouse can list.")


class WarehouseAssignment(BaseModel):
    package_id: int = Field(..., ge=0)


class WarehouseModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    location: str
    capacity: int
    stored_packages: List[int]
    is_full: bool
