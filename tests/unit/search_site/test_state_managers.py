"""Unit tests for the template registry state manager."""

import asyncio
from unittest.mock import patch

import pytest

from search_site.exceptions import (
    ErrorCode,
    TemplateLoadException,
    TemplateNotFoundException,
    TemplateRegistryUnavailableException,
    TemplateRenderException,
)
from search_site.state_managers import StateManager, TemplateRegistry


def test_template_registry_is_state_manager(templates_dir):
    """Test registry follows the state manager lifecycle interface."""
    assert isinstance(TemplateRegistry(templates_dir), StateManager)


@pytest.mark.asyncio
async def test_template_registry_initialize(templates_dir):
    """Test initialization loads every template."""
    registry = TemplateRegistry(templates_dir)
    assert not registry.is_loaded
    assert registry.generation == 0

    await registry.initialize()

    assert registry.is_loaded
    assert registry.generation == 1
    assert registry.loaded_at is not None
    assert await registry.template_names() == ["greeting.html", "searchPage.html"]


@pytest.mark.asyncio
async def test_template_registry_ignores_non_html_files(tmp_path, write_templates):
    """Test only .html files are part of the template set."""
    directory = write_templates(tmp_path / "templates", {"page.html": "ok", "notes.txt": "{{ broken"})
    registry = TemplateRegistry(directory)

    await registry.initialize()

    assert await registry.template_names() == ["page.html"]


@pytest.mark.asyncio
async def test_render(registry):
    """Test rendering a template with context."""
    html = await registry.render("greeting.html", {"who": "world"})

    assert html == "Hello world!"


@pytest.mark.asyncio
async def test_render_escapes_html(registry):
    """Test context values are HTML-escaped."""
    html = await registry.render("greeting.html", {"who": "<script>"})

    assert html == "Hello &lt;script&gt;!"


@pytest.mark.asyncio
async def test_render_missing_template(registry):
    """Test unknown template names raise TemplateNotFoundException."""
    with pytest.raises(TemplateNotFoundException) as exc_info:
        await registry.render("missing.html", {})

    assert exc_info.value.code == ErrorCode.TEMPLATE_NOT_FOUND
    assert exc_info.value.status_code == 500
    assert exc_info.value.details["template"] == "missing.html"


@pytest.mark.asyncio
async def test_render_undefined_variable(registry):
    """Test undefined context variables fail the render instead of rendering empty."""
    with pytest.raises(TemplateRenderException) as exc_info:
        await registry.render("greeting.html", {})

    assert exc_info.value.code == ErrorCode.TEMPLATE_RENDER_ERROR
    assert "who" in exc_info.value.message


@pytest.mark.asyncio
async def test_render_before_initialize(templates_dir):
    """Test rendering without a loaded template set."""
    registry = TemplateRegistry(templates_dir)

    with pytest.raises(TemplateRegistryUnavailableException) as exc_info:
        await registry.render("greeting.html", {"who": "world"})

    assert exc_info.value.status_code == 503


@pytest.mark.asyncio
async def test_cleanup(templates_dir):
    """Test cleanup drops the template set."""
    registry = TemplateRegistry(templates_dir)
    await registry.initialize()

    await registry.cleanup()

    assert not registry.is_loaded
    assert await registry.template_names() == []
    with pytest.raises(TemplateRegistryUnavailableException):
        await registry.render("greeting.html", {"who": "world"})


@pytest.mark.asyncio
async def test_initialize_missing_directory(tmp_path):
    """Test a missing template directory fails loading."""
    registry = TemplateRegistry(tmp_path / "does-not-exist")

    with pytest.raises(TemplateLoadException) as exc_info:
        await registry.initialize()

    assert exc_info.value.code == ErrorCode.TEMPLATE_LOAD_ERROR
    assert not registry.is_loaded


@pytest.mark.asyncio
async def test_initialize_syntax_error(tmp_path, write_templates):
    """Test a malformed template fails loading up front."""
    directory = write_templates(tmp_path / "templates", {"broken.html": "{% if %}"})
    registry = TemplateRegistry(directory)

    with pytest.raises(TemplateLoadException) as exc_info:
        await registry.initialize()

    assert exc_info.value.details["template"] == "broken.html"
    assert exc_info.value.details["line"] == 1


@pytest.mark.asyncio
async def test_reload_picks_up_changes(registry, templates_dir, write_templates):
    """Test reload swaps in edited templates."""
    write_templates(templates_dir, {"greeting.html": "Goodbye {{ who }}!", "extra.html": "extra"})

    generation = await registry.reload()

    assert generation == 2
    assert registry.generation == 2
    assert await registry.render("greeting.html", {"who": "world"}) == "Goodbye world!"
    assert "extra.html" in await registry.template_names()


@pytest.mark.asyncio
async def test_failed_reload_keeps_previous_templates(registry, templates_dir, write_templates):
    """Test a broken edit leaves the old template set serving."""
    write_templates(templates_dir, {"greeting.html": "Hello {{ who "})

    with pytest.raises(TemplateLoadException):
        await registry.reload()

    assert registry.generation == 1
    assert await registry.render("greeting.html", {"who": "world"}) == "Hello world!"


@pytest.mark.asyncio
async def test_concurrent_renders(registry):
    """Test 100 concurrent renders all succeed with identical output."""
    results = await asyncio.gather(
        *(registry.render("searchPage.html", {"current_page": "String"}) for _ in range(100))
    )

    assert len(results) == 100
    assert len(set(results)) == 1
    assert registry.lock.readers == 0


@pytest.mark.asyncio
async def test_reload_during_concurrent_renders(registry, templates_dir, write_templates):
    """Test renders racing a reload see either the old or the new template, never an error."""
    write_templates(templates_dir, {"greeting.html": "Goodbye {{ who }}!"})

    async def render():
        return await registry.render("greeting.html", {"who": "world"})

    tasks = [render() for _ in range(50)] + [registry.reload()] + [render() for _ in range(50)]
    results = await asyncio.gather(*tasks)

    renders = results[:50] + results[51:]
    assert set(renders) <= {"Hello world!", "Goodbye world!"}
    assert results[50] == 2
    assert await render() == "Goodbye world!"


@pytest.mark.asyncio
async def test_initialize_undecodable_template(tmp_path):
    """Test a template that is not valid UTF-8 fails loading as TemplateLoadException."""
    directory = tmp_path / "templates"
    directory.mkdir()
    (directory / "binary.html").write_bytes(b"\xff\xfe bad {{ who }}")
    registry = TemplateRegistry(directory)

    with pytest.raises(TemplateLoadException) as exc_info:
        await registry.initialize()

    assert exc_info.value.details["template"] == "binary.html"
    assert exc_info.value.details["error_type"] == "UnicodeDecodeError"


@pytest.mark.asyncio
async def test_undecodable_reload_keeps_previous_templates(registry, templates_dir):
    """Test a non-UTF-8 edit leaves the old template set serving."""
    (templates_dir / "greeting.html").write_bytes(b"\xff\xfe bad {{ who }}")

    with pytest.raises(TemplateLoadException):
        await registry.reload()

    assert registry.generation == 1
    assert await registry.render("greeting.html", {"who": "world"}) == "Hello world!"


@pytest.mark.asyncio
async def test_reload_parses_off_the_event_loop(registry):
    """Test template files are read and parsed in a worker thread."""
    with patch("search_site.state_managers.asyncio.to_thread", wraps=asyncio.to_thread) as to_thread:
        await registry.reload()

    to_thread.assert_awaited_once_with(registry._build_environment)
    assert registry.generation == 2
