"""Package endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path, Query, status

from ..deps import get_registry, not_found, raise_for_result
from ...models.domain import PackageStatus
from ...schemas.packages import DeliveryEstimateModel, PackageCreate, PackageModel, RerouteRequest
from ...services.registry import Registry

router = APIRouter(prefix="/packages", tags=["packages"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_package(payload: PackageCreate, registry: Registry = Depends(get_registry)) -> dict:
    package_id = registry.create_package(
        weight=payload.weight,
        origin=payload.origin,
        destination=payload.destination,
        status=payload.status,
        priority=payload.priority,
        customer_phone=payload.customer_phone,
    )
    return {"id": package_id}


@router.get("", response_model=List[PackageModel])
def list_packages(
    package_status: PackageStatus | None = Query(default=None, alias="status", description="Optional status filter"),
    registry: Registry = Depends(get_registry),
) -> List[PackageModel]:
    return [PackageModel.model_validate(item) for item in registry.list_packages(status=package_status)]


@router.get("/{package_id}", response_model=PackageModel)
def get_package(
    package_id: int = Path(..., ge=0),
    registry: Registry = Depends(get_registry),
) -> PackageModel:
    package = registry.get_package(package_id)
    if package is None:
        raise not_found("Package", package_id)
    return PackageModel.model_validate(package)


@router.post("/{package_id}/prioritize", status_code=status.HTTP_200_OK)
def prioritize_package(
    package_id: int = Path(..., ge=0),
    registry: Registry = Depends(get_registry),
) -> dict:
    raise_for_result(registry.prioritize_package(package_id))
    return {"success": True, "message": f"Package {package_id} is now express"}


@router.post("/{package_id}/reroute", status_code=status.HTTP_200_OK)
def reroute_package(
    payload: RerouteRequest,
    package_id: int = Path(..., ge=0),
    registry: Registry = Depends(get_registry),
) -> dict:
    raise_for_result(registry.reroute_package(package_id, payload.new_destination))
    return {"success": True, "message": f"Package {package_id} rerouted to {payload.new_destination}"}


@router.post("/{package_id}/notify", status_code=status.HTTP_202_ACCEPTED)
def notify_customer(
    package_id: int = Path(..., ge=0),
    registry: Registry = Depends(get_registry),
) -> dict:
    raise_for_result(registry.send_delivery_notification(package_id))
    return {"success": True, "message": f"Notification queued for package {package_id}"}


@router.get("/{package_id}/eta", response_model=DeliveryEstimateModel)
def estimate_delivery(
    package_id: int = Path(..., ge=0),
    registry: Registry = Depends(get_registry),
) -> DeliveryEstimateModel:
    estimate = raise_for_result(registry.estimate_delivery(package_id))
    return DeliveryEstimateModel.model_validate(estimate)
