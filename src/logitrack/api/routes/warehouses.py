"""Warehouse endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path, status

from ..deps import get_registry, not_found, raise_for_result
from ...schemas.warehouses import WarehouseAssignment, WarehouseCreate, WarehouseModel
from ...services.registry import Registry

router = APIRouter(prefix="/warehouses", tags=["warehouses"])


@router.post("", status_code=status.HTTP_201_CREATED)
def add_warehouse(payload: WarehouseCreate, registry: Registry = Depends(get_registry)) -> dict:
    warehouse_id = registry.add_warehouse(payload.location, payload.capacity)
    return {"id": warehouse_id}


@router.get("", response_model=List[WarehouseModel])
def list_warehouses(registry: Registry = Depends(get_registry)) -> List[WarehouseModel]:
    return [WarehouseModel.model_validate(item) for item in registry.list_warehouses()]


@router.get("/{warehouse_id}", response_model=WarehouseModel)
def get_warehouse(
    warehouse_id: int = Path(..., ge=0),
    registry: Registry = Depends(get_registry),
) -> WarehouseModel:
    warehouse = registry.get_warehouse(warehouse_id)
    if warehouse is None:
        raise not_found("Warehouse", warehouse_id)
    return WarehouseModel.model_validate(warehouse)


@router.post("/{warehouse_id}/packages", status_code=status.HTTP_200_OK)
def assign_package(
    payload: WarehouseAssignment,
    warehouse_id: int = Path(..., ge=0),
    registry: Registry = Depends(get_registry),
) -> dict:
    """Store a package in the warehouse, subject to its capacity."""
    raise_for_result(registry.assign_package_to_warehouse(payload.package_id, warehouse_id))
    return {
        "success": True,
        "message": f"Package {payload.package_id} stored in warehouse {warehouse_id}",
    }


@router.delete("/packages/{package_id}", status_code=status.HTTP_200_OK)
def release_package(
    package_id: int = Path(..., ge=0),
    registry: Registry = Depends(get_registry),
) -> dict:
    raise_for_result(registry.release_package_from_warehouse(package_id))
    return {"success": True, "message": f"Package {package_id} released from its warehouse"}
