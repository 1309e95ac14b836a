"""Unit tests for page rendering contexts."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import ValidationError

from search_site.models import SEARCH_PAGE_PLACEHOLDER, PageTemplate, SearchPageContext
from search_site.state_managers import TemplateRegistry


class TestSearchPageContext:
    """Tests for SearchPageContext."""

    def test_current_page_placeholder(self):
        """Test current_page is always the literal placeholder."""
        context = SearchPageContext()

        assert context.current_page == "String"
        assert SEARCH_PAGE_PLACEHOLDER == "String"

    def test_template_name(self):
        """Test the search page is bound to searchPage.html."""
        assert SearchPageContext.template_name == "searchPage.html"
        assert issubclass(SearchPageContext, PageTemplate)

    def test_context_is_frozen(self):
        """Test the context cannot be changed after construction."""
        context = SearchPageContext()

        with pytest.raises(ValidationError):
            context.current_page = "other"

    def test_model_dump_is_template_context(self):
        """Test only model fields end up in the template context."""
        assert SearchPageContext().model_dump() == {"current_page": "String"}

    @pytest.mark.asyncio
    async def test_render_uses_registry(self):
        """Test render delegates to the registry with the bound template."""
        registry = MagicMock(spec=TemplateRegistry)
        registry.render = AsyncMock(return_value="<html>String</html>")

        html = await SearchPageContext().render(registry)

        assert html == "<html>String</html>"
        registry.render.assert_awaited_once_with("searchPage.html", {"current_page": "String"})

    @pytest.mark.asyncio
    async def test_render_with_real_registry(self, registry):
        """Test rendering the search page against a loaded registry."""
        html = await SearchPageContext().render(registry)

        assert '<p class="current-page">String</p>' in html
