"""Search Site models"""

from search_site.models.base_models import (
    DebugInfo,
    DetailedHealthResponse,
    HealthResponse,
    TemplateListResponse,
    TemplateReloadResponse,
)
from search_site.models.pages import SEARCH_PAGE_PLACEHOLDER, PageTemplate, SearchPageContext

__all__ = [
    "DebugInfo",
    "DetailedHealthResponse",
    "HealthResponse",
    "TemplateListResponse",
    "TemplateReloadResponse",
    "SEARCH_PAGE_PLACEHOLDER",
    "PageTemplate",
    "SearchPageContext",
]
