"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from search_site.config import DEFAULT_TEMPLATES_DIR, Settings
from search_site.core.app_factory import create_app
from search_site.state_managers import TemplateRegistry

TEST_ADMIN_API_KEY = "test-admin-key"

SEARCH_TEMPLATE = '<html><body><p class="current-page">{{ current_page }}</p></body></html>'


def _write_templates(directory: Path, templates: dict[str, str]) -> Path:
    """Write {name: source} into directory and return it."""
    directory.mkdir(parents=True, exist_ok=True)
    for template_name, source in templates.items():
        (directory / template_name).write_text(source, encoding="utf-8")
    return directory


def _make_settings(templates_dir: Path = DEFAULT_TEMPLATES_DIR, **overrides) -> Settings:
    """Settings isolated from any local .env file."""
    values = {
        "templates_dir": templates_dir,
        "admin_api_key": TEST_ADMIN_API_KEY,
        "rate_limit_enabled": False,
        "trusted_hosts": "*",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def templates_dir(tmp_path):
    """Temporary template directory with a minimal search page."""
    return _write_templates(
        tmp_path / "templates",
        {
            "searchPage.html": SEARCH_TEMPLATE,
            "greeting.html": "Hello {{ who }}!",
        },
    )


@pytest_asyncio.fixture
async def registry(templates_dir):
    """Initialized TemplateRegistry over the temporary template directory."""
    registry = TemplateRegistry(templates_dir)
    await registry.initialize()
    yield registry
    await registry.cleanup()


@pytest.fixture
def settings():
    """Settings pointing at the packaged templates."""
    return _make_settings()


@pytest.fixture
def app(settings):
    """FastAPI application built with test settings."""
    return create_app(settings)


@pytest.fixture
def test_client(app):
    """FastAPI test client with lifespan context."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def admin_headers():
    """Authorization header for admin endpoints."""
    return {"Authorization": f"Bearer {TEST_ADMIN_API_KEY}"}


@pytest.fixture
def write_templates():
    """Helper writing {name: source} templates into a directory."""
    return _write_templates


@pytest.fixture
def make_settings():
    """Factory for Settings isolated from any local .env file."""
    return _make_settings


@pytest.fixture
def search_template():
    """Minimal search page template source."""
    return SEARCH_TEMPLATE
