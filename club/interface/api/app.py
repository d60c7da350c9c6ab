"""FastAPI application."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from club.application.listener import InvitationSyncListener
from club.config import Settings
from club.domain.error import TransientStoreError
from club.interface.api.routes import calendar, events, health, invitations
from club.interface.error import to_http_exception
from club.util.di.container import create_container, setup_di
from club.util.observability import instrument_fastapi


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the invitation sync listener for every club; stop it on shutdown."""
    container = app.state.dishka_container
    listener = await container.get(InvitationSyncListener)
    listener.watch()
    yield
    listener.close()
    await container.close()


async def transient_store_error_handler(
    request: Request, exc: TransientStoreError
) -> JSONResponse:
    """Report store outages as 503 so clients retry."""
    http_exc = to_http_exception(exc)
    return JSONResponse(
        status_code=http_exc.status_code,
        content={"detail": http_exc.detail},
        headers=http_exc.headers,
    )


def create_app() -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Club Schedule API",
        description="Recurring club events: calendar, next occurrences and invitations",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Setup dependency injection
    # Settings are loaded from environment automatically
    container = create_container()
    setup_di(app_instance, container)

    # Raised outside route handlers too, e.g. when the session commits
    app_instance.add_exception_handler(
        TransientStoreError, transient_store_error_handler
    )

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(calendar.router)
    app_instance.include_router(events.router)
    app_instance.include_router(invitations.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
