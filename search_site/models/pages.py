"""Rendering contexts for HTML pages.

Each page is a pydantic model whose fields become the template context.
The template file a page renders is declared on the class.
"""

from typing import TYPE_CHECKING, ClassVar

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from search_site.state_managers import TemplateRegistry

SEARCH_PAGE_PLACEHOLDER = "String"


class PageTemplate(BaseModel):
    """Base class for page contexts bound to a template file."""

    model_config = ConfigDict(frozen=True)

    template_name: ClassVar[str]

    async def render(self, registry: "TemplateRegistry") -> str:
        """Render this page's template with the model fields as context."""
        return await registry.render(self.template_name, self.model_dump())


class SearchPageContext(PageTemplate):
    """Context for the search page."""

    template_name: ClassVar[str] = "searchPage.html"

    current_page: str = SEARCH_PAGE_PLACEHOLDER
