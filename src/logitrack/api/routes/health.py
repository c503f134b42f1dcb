"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ..deps import get_registry
from ...services.registry import Registry

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root(registry: Registry = Depends(get_registry)) -> dict:
    """Liveness check with the current entity counts."""
    return {"status": "ok", "counts": registry.counts()}
