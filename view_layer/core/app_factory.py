"""Application factory for creating and configuring the FastAPI app."""

from fastapi import FastAPI

from view_layer import __version__
from view_layer.config import get_settings
from view_layer.core.lifespan import lifespan
from view_layer.core.middleware import setup_middleware
from view_layer.middleware.error_handlers import register_error_handlers
from view_layer.routers import health_router, view_router


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()

    app = FastAPI(
        title="View Layer",
        description="""
        Template resolution and view model rendering.

        - `/` - HTML page rendered from a view model tree
        - `/{controller}/{action}` - JSON rendering of a view model tree, `?callback=` for JSONP
        - `/health` - Basic health check
        """,
        version=__version__,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)

    register_error_handlers(app)

    app.include_router(health_router.router, tags=["health"])
    app.include_router(view_router.router, tags=["views"])

    return app
