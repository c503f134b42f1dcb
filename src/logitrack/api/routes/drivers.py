"""Driver endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path, Query, status

from ..deps import get_registry, not_found
from ...schemas.drivers import DriverCreate, DriverModel
from ...services.registry import Registry

router = APIRouter(prefix="/drivers", tags=["drivers"])


@router.post("", status_code=status.HTTP_201_CREATED)
def register_driver(payload: DriverCreate, registry: Registry = Depends(get_registry)) -> dict:
    driver_id = registry.register_driver(payload.name, payload.vehicle_type)
    return {"id": driver_id}


@router.get("", response_model=List[DriverModel])
def list_drivers(
    available: bool | None = Query(default=None, description="Only drivers with this availability"),
    registry: Registry = Depends(get_registry),
) -> List[DriverModel]:
    return [DriverModel.model_validate(item) for item in registry.list_drivers(available=available)]


@router.get("/{driver_id}", response_model=DriverModel)
def get_driver(
    driver_id: int = Path(..., ge=0),
    registry: Registry = Depends(get_registry),
) -> DriverModel:
    driver = registry.get_driver(driver_id)
    if driver is None:
        raise not_found("Driver", driver_id)
    return DriverModel.model_validate(driver)
