"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers.
No business logic here. See assetverse.core.lifespan and
assetverse.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
optionally clear the get_settings cache) before calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from assetverse.api import api_router
from assetverse.core.config import get_settings
from assetverse.core.exception_handlers import register_exception_handlers
from assetverse.core.lifespan import create_lifespan
from assetverse.core.limiter import configure_limiter
from assetverse.middleware import RequestIDMiddleware, TimeoutMiddleware
from assetverse.shared.logging import setup_logging


def create_app() -> FastAPI:
    """Build and return the FastAPI application. Settings are resolved here (deferred from import)."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.limiter = configure_limiter()
    register_exception_handlers(app)

    # Middleware: last added = outermost. Order: timeout -> request ID -> CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)
    app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)

    app.include_router(api_router, prefix=settings.api_prefix)

    return app


app = create_app()
