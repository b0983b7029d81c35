"""ordersync FastAPI application.

Receives document change events and runs them through the sync fabric.
Adapters are chosen by STORE_ADAPTER / PUSH_ADAPTER; PROTEAN_ENV selects
the domain config overlay.

Usage:
    uvicorn ordersync.app:app --host 0.0.0.0 --port 8000
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from ordersync.api.routes import router
from ordersync.domain import ordersync


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialized on startup, not at import: domain discovery imports this module.
    ordersync.init()
    yield


app = FastAPI(
    title="ordersync",
    description="Order synchronization fabric change-event receiver",
    lifespan=lifespan,
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the ordersync domain context for each request."""
    with ordersync.domain_context():
        response = await call_next(request)
    return response


app.include_router(router)
