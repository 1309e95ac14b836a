"""State managers for handling application-wide mutable state.

State managers are created in the application lifespan, stored on
app.state and handed to routes through FastAPI dependencies. All state
managers inherit from StateManager ABC.
"""

import asyncio
import time
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
    TemplateNotFound,
    TemplateSyntaxError,
    select_autoescape,
)

from search_site.exceptions import (
    TemplateLoadException,
    TemplateNotFoundException,
    TemplateRegistryUnavailableException,
    TemplateRenderException,
)
from search_site.locks import ReadWriteLock
from search_site.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

TEMPLATE_EXTENSIONS = ("html",)


class StateManager(ABC):
    """Base class for all state managers.

    State managers provide lock-guarded access to mutable application state.
    All subclasses must implement lifecycle methods.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the state manager (called during app startup)."""
        pass

    @abstractmethod
    async def cleanup(self) -> None:
        """Cleanup resources (called during app shutdown)."""
        pass


class TemplateRegistry(StateManager):
    """Process-wide store of parsed page templates.

    Renders take the read lock, so any number of requests render at once.
    Reloads parse the new template set outside the lock and only take the
    write lock to swap it in.
    """

    def __init__(self, templates_dir: Path | str):
        """Initialize the template registry.

        Args:
            templates_dir: Directory the templates are loaded from
        """
        self._templates_dir = Path(templates_dir)
        self._environment: Environment | None = None
        self._template_names: list[str] = []
        self._generation: int = 0
        self._loaded_at: float | None = None
        self._lock = ReadWriteLock()

    @property
    def templates_dir(self) -> Path:
        return self._templates_dir

    @property
    def generation(self) -> int:
        """Number of successful loads so far (0 before the first load)."""
        return self._generation

    @property
    def loaded_at(self) -> float | None:
        return self._loaded_at

    @property
    def is_loaded(self) -> bool:
        return self._environment is not None

    @property
    def lock(self) -> ReadWriteLock:
        return self._lock

    async def initialize(self) -> None:
        """Load the template set (called during app startup)."""
        await self.reload()

    async def cleanup(self) -> None:
        """Drop the loaded templates; later renders fail as unavailable."""
        async with self._lock.write():
            self._environment = None
            self._template_names = []
        log_with_context(
            logger,
            "info",
            "Template registry cleaned up",
            templates_dir=str(self._templates_dir),
            event_type="template_registry_cleanup",
        )

    def _build_environment(self) -> tuple[Environment, list[str]]:
        """Create a Jinja2 environment and parse every template eagerly.

        Raises:
            TemplateLoadException: If the directory is missing or a template cannot be read or parsed
        """
        if not self._templates_dir.is_dir():
            raise TemplateLoadException(
                f"Templates directory not found: {self._templates_dir}",
                details={"templates_dir": str(self._templates_dir)},
            )

        environment = Environment(
            loader=FileSystemLoader(self._templates_dir),
            autoescape=select_autoescape(TEMPLATE_EXTENSIONS),
            undefined=StrictUndefined,
            auto_reload=False,
        )

        names = sorted(environment.list_templates(extensions=TEMPLATE_EXTENSIONS))
        for template_name in names:
            try:
                environment.get_template(template_name)
            except TemplateSyntaxError as e:
                raise TemplateLoadException(
                    f"Syntax error in template {template_name}: {e.message}",
                    details={"template": template_name, "line": e.lineno},
                ) from e
            except (TemplateError, UnicodeDecodeError, OSError) as e:
                raise TemplateLoadException(
                    f"Cannot read template {template_name}: {e}",
                    details={"template": template_name, "error_type": type(e).__name__},
                ) from e

        return environment, names

    async def reload(self) -> int:
        """Re-read the template directory and swap in the new template set.

        On failure the previously loaded templates stay active.

        Returns:
            The new generation number

        Raises:
            TemplateLoadException: If the new template set cannot be loaded
        """
        try:
            environment, names = await asyncio.to_thread(self._build_environment)
        except TemplateLoadException as e:
            log_with_context(
                logger,
                "error",
                "Failed to load templates",
                error=e.message,
                templates_dir=str(self._templates_dir),
                kept_generation=self._generation,
                event_type="template_load_error",
            )
            raise

        async with self._lock.write():
            self._environment = environment
            self._template_names = names
            self._generation += 1
            self._loaded_at = time.time()
            generation = self._generation

        log_with_context(
            logger,
            "info",
            "Templates loaded",
            templates_dir=str(self._templates_dir),
            template_count=len(names),
            generation=generation,
            event_type="template_load",
        )
        return generation

    async def template_names(self) -> list[str]:
        """Get the names of all loaded templates."""
        async with self._lock.read():
            return list(self._template_names)

    async def render(self, template_name: str, context: Mapping[str, Any]) -> str:
        """Render a named template with the given context under the read lock.

        Args:
            template_name: Template file name relative to the templates directory
            context: Variables made available to the template

        Returns:
            Rendered text

        Raises:
            TemplateRegistryUnavailableException: If no template set is loaded
            TemplateNotFoundException: If the template does not exist
            TemplateRenderException: If rendering fails
        """
        async with self._lock.read():
            environment = self._environment
            if environment is None:
                raise TemplateRegistryUnavailableException(details={"template": template_name})

            try:
                template = environment.get_template(template_name)
            except TemplateNotFound as e:
                raise TemplateNotFoundException(template_name) from e
            except TemplateError as e:
                raise TemplateRenderException(template_name, str(e)) from e

            try:
                return template.render(context)
            except TemplateError as e:
                raise TemplateRenderException(template_name, str(e)) from e
