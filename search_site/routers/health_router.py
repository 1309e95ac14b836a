"""Health and debug endpoints."""

import os
import platform
import sys
import time
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from search_site import __version__
from search_site.config import Settings
from search_site.dependencies import get_app_settings, get_template_registry
from search_site.models import DebugInfo, DetailedHealthResponse, HealthResponse
from search_site.models.pages import SearchPageContext
from search_site.security import get_cors_origins, get_trusted_hosts, verify_api_key
from search_site.state_managers import TemplateRegistry

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Basic health check endpoint.

    Returns simple status for Docker healthcheck and basic monitoring.
    For detailed health status, use `/health/ready`.
    """
    return HealthResponse(status="ok", version=__version__)


@router.get("/health/ready", response_model=DetailedHealthResponse)
async def readiness_check(registry: TemplateRegistry = Depends(get_template_registry)):
    """Readiness probe - can the application serve pages?

    Checks:
    - Template registry has a loaded template set
    - The search page template is part of it

    **Returns:**
    - 200: Application is ready to serve requests
    - 503: Application is not ready
    """
    checks = {}

    checks["template_registry"] = "ok" if registry.is_loaded else "not_loaded"

    names = await registry.template_names()
    search_template = SearchPageContext.template_name
    checks["search_template"] = "ok" if search_template in names else f"missing: {search_template}"

    all_healthy = all(result == "ok" for result in checks.values())

    return JSONResponse(
        status_code=200 if all_healthy else 503,
        content=DetailedHealthResponse(
            status="healthy" if all_healthy else "unhealthy",
            version=__version__,
            timestamp=datetime.now(UTC),
            checks=checks,
        ).model_dump(mode="json"),
    )


@router.get(
    "/debug",
    response_model=DebugInfo,
    dependencies=[Depends(verify_api_key)],
    responses={
        200: {"description": "System diagnostics and state information"},
        401: {"description": "Unauthorized - missing or invalid API key"},
    },
)
async def debug_info(
    request: Request,
    registry: TemplateRegistry = Depends(get_template_registry),
    settings: Settings = Depends(get_app_settings),
):
    """Debug endpoint with system state and diagnostics.

    **🔒 Authentication Required:** This endpoint requires Bearer token authentication.

    Returns detailed information about:
    - System info (version, uptime, Python version)
    - Template registry state (generation, templates, lock readers)
    - Configuration (sanitized, no secrets)
    - Request statistics
    """
    uptime_seconds = int(time.time() - request.app.state.startup_time)

    system_info = {
        "version": __version__,
        "python_version": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
        "platform": platform.system(),
        "uptime_seconds": uptime_seconds,
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
    }

    watcher = getattr(request.app.state, "template_watcher", None)
    state_info = {
        "template_registry": "loaded" if registry.is_loaded else "not_loaded",
        "template_generation": registry.generation,
        "templates": await registry.template_names(),
        "template_readers": registry.lock.readers,
        "template_watcher": "running" if watcher is not None and watcher.running else "stopped",
    }
    if registry.loaded_at is not None:
        state_info["templates_loaded_at"] = datetime.fromtimestamp(registry.loaded_at, UTC).isoformat()

    # Config info (sanitized - no secrets)
    config_info = {
        "api_host": settings.api_host,
        "api_port": settings.api_port,
        "templates_dir": str(settings.templates_dir),
        "templates_hot_reload": settings.templates_hot_reload,
        "templates_reload_interval": settings.templates_reload_interval,
        "cors_origins": get_cors_origins(settings),
        "trusted_hosts": get_trusted_hosts(settings),
        "rate_limit_enabled": settings.rate_limit_enabled,
        "rate_limit_default": settings.rate_limit_default,
    }

    request_stats = {
        "total_requests": request.app.state.request_count,
    }

    return DebugInfo(
        system=system_info,
        state=state_info,
        config=config_info,
        requests=request_stats,
    )
