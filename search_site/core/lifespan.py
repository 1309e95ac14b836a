"""Application lifespan management."""

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from search_site import __version__
from search_site.config import Settings
from search_site.logging_config import get_logger, log_with_context
from search_site.services.template_watcher import TemplateWatcher
from search_site.state_managers import TemplateRegistry

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan - startup and shutdown events.

    Exceptions after yield are logged and re-raised so cleanup still runs
    and the server sees the failure.
    """
    settings: Settings = app.state.settings
    app.state.startup_time = time.time()
    app.state.request_count = 0

    log_with_context(
        logger,
        "info",
        "Starting Search Site application",
        version=__version__,
        templates_dir=str(settings.templates_dir),
        event_type="app_startup",
    )

    # The registry is owned by the app and injected into routes via Depends
    registry = TemplateRegistry(settings.templates_dir)
    await registry.initialize()
    app.state.template_registry = registry

    watcher: TemplateWatcher | None = None
    if settings.templates_hot_reload:
        watcher = TemplateWatcher(registry, settings.templates_dir, settings.templates_reload_interval)
        await watcher.start()
    app.state.template_watcher = watcher

    log_with_context(
        logger,
        "info",
        "State managers initialized",
        hot_reload=settings.templates_hot_reload,
        event_type="state_managers_ready",
    )

    try:
        yield
    except Exception as e:
        log_with_context(
            logger,
            "error",
            "Application error during lifespan",
            error=str(e),
            error_type=type(e).__name__,
            event_type="app_error",
        )
        raise
    finally:
        log_with_context(
            logger,
            "info",
            "Shutting down Search Site application",
            event_type="app_shutdown",
        )

        if watcher is not None:
            await watcher.stop()

        await registry.cleanup()
        log_with_context(
            logger,
            "info",
            "State managers cleaned up",
            event_type="state_managers_cleanup",
        )
