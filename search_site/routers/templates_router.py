"""Template administration endpoints."""

from fastapi import APIRouter, Depends

from search_site.dependencies import get_template_registry
from search_site.logging_config import get_logger, log_with_context
from search_site.models import TemplateListResponse, TemplateReloadResponse
from search_site.security import verify_api_key
from search_site.state_managers import TemplateRegistry

logger = get_logger(__name__)

router = APIRouter(dependencies=[Depends(verify_api_key)])


@router.get("", response_model=TemplateListResponse)
async def list_templates(registry: TemplateRegistry = Depends(get_template_registry)):
    """List the currently loaded templates.

    **🔒 Authentication Required**
    """
    return TemplateListResponse(
        generation=registry.generation,
        templates=await registry.template_names(),
    )


@router.post(
    "/reload",
    response_model=TemplateReloadResponse,
    responses={
        200: {"description": "Templates reloaded"},
        401: {"description": "Unauthorized - missing or invalid API key"},
        500: {"description": "New template set failed to load; previous templates still active"},
    },
)
async def reload_templates(registry: TemplateRegistry = Depends(get_template_registry)):
    """Reload all templates from disk.

    **🔒 Authentication Required**

    Parses the whole template directory and swaps it in atomically. Renders
    in flight finish against the old set; if loading fails the old set stays active.
    """
    generation = await registry.reload()
    names = await registry.template_names()

    log_with_context(
        logger,
        "info",
        "Templates reloaded via API",
        generation=generation,
        template_count=len(names),
        event_type="template_reload_api",
    )

    return TemplateReloadResponse(status="reloaded", generation=generation, template_count=len(names))
