"""
Main FastAPI application entry point.

Wires the credential store, the connection pool drainer and the logging
event handler into the application lifespan, and mounts the admin API.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.core.config import settings
from src.core.container import (
    get_cache,
    get_connection_pool_drainer,
    get_credential_store,
    get_database,
    get_event_bus,
    get_logger,
    get_logging_event_handler,
)
from src.presentation.api.middleware.authentication_telemetry import (
    AuthenticationTelemetryMiddleware,
)
from src.presentation.api.middleware.trace_middleware import TraceMiddleware
from src.presentation.api.v1 import v1_router
from src.presentation.api.v1.errors import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    Startup:
        - Subscribe the logging handler and the pool drainer to the event bus
        - Load the database credential and start watching its file

    Shutdown (reverse order):
        - Cancel pending drain grace windows and unsubscribe
        - Stop the credential watcher
        - Dispose the database engine

    Args:
        app: FastAPI application instance.

    Yields:
        None during application lifetime.
    """
    logger = get_logger()
    event_bus = get_event_bus()
    logging_handler = get_logging_event_handler()
    drainer = get_connection_pool_drainer()
    store = get_credential_store()

    logging_handler.subscribe(event_bus)
    drainer.subscribe()
    await store.start()
    logger.info(
        "application_started",
        credential_state=store.state.value,
        watch_mode=store.watcher.mode,
    )

    yield

    await drainer.shutdown()
    drainer.unsubscribe()
    logging_handler.unsubscribe(event_bus)
    await store.stop()
    await get_database().close()
    await get_cache().close()
    logger.info("application_stopped")


app = FastAPI(
    title=settings.app_name,
    description="Trust and credential core for the identity provider migration",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug,
    lifespan=lifespan,
)

# Issuer classification and authentication telemetry (inside the trace scope)
app.add_middleware(AuthenticationTelemetryMiddleware)

# Request correlation
app.add_middleware(TraceMiddleware)

# RFC 7807 error responses
register_exception_handlers(app)

app.include_router(v1_router)


@app.get("/")
async def root() -> dict[str, str]:
    """
    Root endpoint - basic status.

    Returns:
        dict: Service name, status and version.
    """
    return {
        "message": settings.app_name,
        "status": "operational",
        "version": settings.app_version,
    }


@app.get("/health")
async def health() -> dict[str, str]:
    """
    Health check endpoint for monitoring and load balancers.

    Reports degraded while no database credential has been delivered.
    """
    store = get_credential_store()
    if store.current is None:
        return {"status": "degraded", "credentials": store.state.value}
    return {"status": "healthy", "credentials": store.state.value}
