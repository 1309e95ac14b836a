"""Page/view routes for serving HTML pages."""

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from search_site.dependencies import get_template_registry
from search_site.state_managers import TemplateRegistry
from search_site.views.template_renderer import TemplateRenderer

router = APIRouter()


@router.get("/search", response_class=HTMLResponse)
async def search_page(registry: TemplateRegistry = Depends(get_template_registry)):
    """Render the search page."""
    return await TemplateRenderer.render_search_page(registry)
