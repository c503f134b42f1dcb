"""Route endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path, Query, status

from ..deps import get_registry, not_found, raise_for_result
from ...schemas.routing import (
    RouteCreate,
    RouteDriverAssignment,
    RouteModel,
    RoutePackageAssignment,
    RouteSuggestionModel,
)
from ...services.registry import Registry
from ...services.routing.planner import suggest_route

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_route(payload: RouteCreate, registry: Registry = Depends(get_registry)) -> dict:
    route_id = registry.create_route(payload.origin, payload.destination, payload.distance_km)
    return {"id": route_id}


@router.get("", response_model=List[RouteModel])
def list_routes(registry: Registry = Depends(get_registry)) -> List[RouteModel]:
    return [RouteModel.model_validate(item) for item in registry.list_routes()]


@router.get("/suggest", response_model=RouteSuggestionModel)
def suggest(
    origin: str = Query(..., min_length=1),
    destination: str = Query(..., min_length=1),
) -> RouteSuggestionModel:
    """Look up a known lane; unknown pairs come back as a direct lane."""
    return RouteSuggestionModel.model_validate(suggest_route(origin, destination))


@router.get("/{route_id}", response_model=RouteModel)
def get_route(
    route_id: int = Path(..., ge=0),
    registry: Registry = Depends(get_registry),
) -> RouteModel:
    route = registry.get_route(route_id)
    if route is None:
        raise not_found("Route", route_id)
    return RouteModel.model_validate(route)


@router.post("/{route_id}/driver", status_code=status.HTTP_200_OK)
def assign_driver(
    payload: RouteDriverAssignment,
    route_id: int = Path(..., ge=0),
    registry: Registry = Depends(get_registry),
) -> dict:
    raise_for_result(registry.assign_driver_to_route(route_id, payload.driver_id))
    return {"success": True, "message": f"Driver {payload.driver_id} assigned to route {route_id}"}


@router.post("/{route_id}/packages", status_code=status.HTTP_200_OK)
def assign_package(
    payload: RoutePackageAssignment,
    route_id: int = Path(..., ge=0),
    registry: Registry = Depends(get_registry),
) -> dict:
    raise_for_result(registry.assign_package_to_route(payload.package_id, route_id))
    return {"success": True, "message": f"Package {payload.package_id} added to route {route_id}"}


@router.post("/{route_id}/start", status_code=status.HTTP_200_OK)
def start_route(
    route_id: int = Path(..., ge=0),
    registry: Registry = Depends(get_registry),
) -> dict:
    raise_for_result(registry.start_route(route_id))
    return {"success": True, "message": f"Route {route_id} started"}


@router.post("/{route_id}/complete", status_code=status.HTTP_200_OK)
def complete_route(
    route_id: int = Path(..., ge=0),
    registry: Registry = Depends(get_registry),
) -> dict:
    raise_for_result(registry.complete_route(route_id))
    return {"success": True, "message": f"Route {route_id} completed"}
