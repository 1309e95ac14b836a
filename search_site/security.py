"""Security helpers and authentication for Search Site."""

import secrets

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from search_site.config import Settings
from search_site.dependencies import get_app_settings
from search_site.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

# HTTP Bearer token scheme
security = HTTPBearer(auto_error=False)


async def verify_api_key(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_app_settings),
) -> None:
    """Verify the admin API key from the Authorization header.

    Args:
        request: The FastAPI request object
        credentials: HTTP Bearer credentials from header
        settings: Settings the app was created with

    Raises:
        HTTPException: If API key is not configured, missing or invalid

    Example:
        Authorization: Bearer your-api-key-here
    """
    api_key = settings.admin_api_key

    if not api_key:
        log_with_context(
            logger,
            "error",
            "ADMIN_API_KEY not configured",
            event_type="security_error",
            path=request.url.path,
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication not configured - ADMIN_API_KEY environment variable is missing",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not credentials:
        log_with_context(
            logger,
            "warning",
            "Missing API key",
            event_type="auth_failure",
            path=request.url.path,
            ip=request.client.host if request.client else "unknown",
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing API key",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not secrets.compare_digest(credentials.credentials.encode(), api_key.encode()):
        log_with_context(
            logger,
            "warning",
            "Invalid API key",
            event_type="auth_failure",
            path=request.url.path,
            ip=request.client.host if request.client else "unknown",
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
            headers={"WWW-Authenticate": "Bearer"},
        )

    log_with_context(
        logger,
        "debug",
        "API key verified",
        event_type="auth_success",
        path=request.url.path,
    )


def get_cors_origins(settings: Settings) -> list[str]:
    """Get allowed CORS origins from settings."""
    return [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]


def get_trusted_hosts(settings: Settings) -> list[str]:
    """Get trusted host patterns from settings."""
    return [host.strip() for host in settings.trusted_hosts.split(",") if host.strip()]
