"""Application factory for creating and configuring the FastAPI app."""

from fastapi import FastAPI

from search_site import __version__
from search_site.config import Settings, get_settings
from search_site.core.lifespan import lifespan
from search_site.core.middleware import setup_middleware
from search_site.middleware.error_handlers import register_error_handlers
from search_site.routers import health_router, templates_router, view_router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to run with; defaults to the process-wide singleton

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Search Site",
        description="""
        **Search Site** - server-rendered search page

        ## Pages
        - `/search` - Search page (HTML)

        ## Templates
        Pages are rendered from Jinja2 templates held in a shared registry.
        Enable `TEMPLATES_HOT_RELOAD` to pick up template edits without a restart,
        or call `POST /api/templates/reload`.

        ## Authentication
        `/debug` and `/api/templates/*` require `Authorization: Bearer <ADMIN_API_KEY>`.

        ## Health & Monitoring
        - `/health` - Basic health check
        - `/health/ready` - Readiness probe (templates loaded?)
        """,
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.request_count = 0

    setup_middleware(app, settings)

    register_error_handlers(app)

    # View routes (HTML pages) - no prefix
    app.include_router(view_router.router, tags=["views"])

    # Health and debug endpoints
    app.include_router(health_router.router, tags=["health"])

    # Template administration
    app.include_router(templates_router.router, prefix="/api/templates", tags=["templates"])

    return app
