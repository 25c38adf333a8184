"""FastAPI application."""

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from margin.config import Settings
from margin.interface.api.cors import CORSPolicyMiddleware
from margin.interface.api.routes import comments, health, visits
from margin.persistence.error import StoreError
from margin.util.di.container import create_container, setup_di
from margin.util.observability import (
    instrument_fastapi,
    instrument_httpx,
)


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Pass a document store failure through with the store's own status."""
    logfire.warn(
        "Store failure returned to caller",
        path=request.url.path,
        status_code=exc.status_code,
        error=exc.message,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "detail": exc.detail},
    )


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container; the production container when omitted
    """
    settings = Settings()

    # Instrument httpx for outbound store requests
    instrument_httpx()

    app_instance = FastAPI(
        title="Margin Comment Gateway",
        description="Anonymous threaded comments for a static blog, proxied to a document store",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    # Setup dependency injection
    setup_di(app_instance, container or create_container())

    # Added last so it wraps everything, preflight never reaches DI
    app_instance.add_middleware(
        CORSPolicyMiddleware,
        allowed_origins=settings.cors.origins,
    )

    app_instance.add_exception_handler(StoreError, store_error_handler)

    app_instance.include_router(health.router)
    app_instance.include_router(comments.router)
    app_instance.include_router(visits.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
