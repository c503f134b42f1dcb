"""Request dependencies shared by the route modules."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from ..services.registry import ErrorKind, Registry, Result

_STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CAPACITY_EXCEEDED: status.HTTP_409_CONFLICT,
    ErrorKind.DRIVER_OCCUPIED: status.HTTP_409_CONFLICT,
    ErrorKind.INVALID_STATE: status.HTTP_409_CONFLICT,
    ErrorKind.NO_ROUTE: 422,
}


def get_registry(request: Request) -> Registry:
    return request.app.state.registry


def raise_for_result(result: Result):
    """Return the result's value, or raise the matching HTTPException."""
    if result.ok:
        return result.value
    error = result.error
    raise HTTPException(
        status_code=_STATUS_BY_KIND.get(error.kind, status.HTTP_400_BAD_REQUEST),
        detail={"kind": error.kind.value, "message": error.message},
    )


def not_found(entity: str, entity_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"kind": ErrorKind.NOT_FOUND.value, "message": f"{entity} {entity_id} not found"},
    )
