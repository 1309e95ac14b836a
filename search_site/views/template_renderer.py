"""Template rendering utilities for HTML views."""

from fastapi.responses import HTMLResponse

from search_site.models.pages import SearchPageContext
from search_site.state_managers import TemplateRegistry


class TemplateRenderer:
    """Handles rendering of page templates for all site views."""

    @staticmethod
    async def render_search_page(registry: TemplateRegistry) -> HTMLResponse:
        """Render the search page.

        Template errors are not handled here; they propagate to the
        registered exception handlers and fail the request.

        Args:
            registry: Template registry provided by the router via Depends

        Returns:
            HTMLResponse with the rendered search page
        """
        context = SearchPageContext()
        return HTMLResponse(await context.render(registry))
