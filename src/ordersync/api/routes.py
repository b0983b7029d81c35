"""FastAPI routes for change-event delivery.

Thin adapter: the store's trigger substrate posts each change here and
the fabric does the rest. Changes caused by the fabric's own writes come
back through the same endpoint (or, with the in-memory store, through the
fabric queue drained in the same request).
"""

import structlog
from fastapi import APIRouter, HTTPException

from ordersync.api.schemas import ChangeEventRequest, ChangeEventResponse, HealthResponse
from ordersync.domain import ordersync
from ordersync.fabric import get_fabric
from ordersync.store.port import DocumentChange

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["changes"])


@router.post("/changes", response_model=ChangeEventResponse)
async def receive_change(body: ChangeEventRequest) -> ChangeEventResponse:
    """Handle one document change event."""
    try:
        change = DocumentChange(path=body.path, before=body.before, after=body.after)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    fabric = get_fabric()
    effects = fabric.handle(change)
    fabric.drain()

    return ChangeEventResponse(path=change.path, kind=change.kind.value, effects=len(effects))


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        domain=ordersync.name,
        routes=[route.name for route in get_fabric().routes],
    )
