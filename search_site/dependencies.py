"""FastAPI dependencies for dependency injection."""

from fastapi import Request

from search_site.config import Settings
from search_site.state_managers import TemplateRegistry


async def get_template_registry(request: Request) -> TemplateRegistry:
    """
    Get the template registry from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        The shared TemplateRegistry instance.

    Raises:
        RuntimeError: If the template registry is not initialized.
    """
    registry: TemplateRegistry | None = getattr(request.app.state, "template_registry", None)

    if registry is None:
        raise RuntimeError("Template registry not initialized.")

    return registry


async def get_app_settings(request: Request) -> Settings:
    """
    Get the settings the application was created with.

    Args:
        request: The FastAPI request object.

    Returns:
        The Settings instance stored on app state.

    Raises:
        RuntimeError: If settings are not attached to the app.
    """
    settings: Settings | None = getattr(request.app.state, "settings", None)

    if settings is None:
        raise RuntimeError("Settings not attached to application state.")

    return settings
