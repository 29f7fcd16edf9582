"""
Test Configuration
==================

Pytest fixtures shared by the unit tests: isolated settings, a template on
disk and a renderer wired to mock Playwright objects.
"""

from pathlib import Path
from typing import AsyncGenerator
from unittest.mock import MagicMock

import pytest
import pytest_asyncio

from pw_renderer.config.settings import Settings
from pw_renderer.core.rendering.renderer import PlaywrightRenderer
from pw_renderer.core.rendering.template_cache import TemplateCache

from tests.utils.mocks import make_browser, make_element, make_page


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings pointing every path into a temporary directory."""
    return Settings(
        environment="testing",
        log_level="DEBUG",
        temp_html_path=tmp_path / "temp" / "html",
        resources_path=tmp_path / "resources",
        restart_num=100,
        restart_delay=0,
        multi_page_throttle=0,
    )


@pytest.fixture
def template_file(tmp_path: Path) -> Path:
    """A small HTML template on disk."""
    path = tmp_path / "templates" / "card.html"
    path.parent.mkdir(parents=True)
    path.write_text(
        '<html><body><div id="container">{{ title }}|{{ resPath }}</div></body></html>',
        encoding="utf-8",
    )
    return path


@pytest.fixture
def mock_observer() -> MagicMock:
    """Watchdog observer stand-in; no thread is started."""
    observer = MagicMock(name="observer")
    observer.is_alive.return_value = True
    return observer


@pytest.fixture
def template_cache(test_settings: Settings, mock_observer: MagicMock) -> TemplateCache:
    return TemplateCache(test_settings, observer=mock_observer)


@pytest.fixture
def element() -> MagicMock:
    return make_element()


@pytest.fixture
def page(element: MagicMock) -> MagicMock:
    return make_page(element)


@pytest.fixture
def browser(page: MagicMock) -> MagicMock:
    return make_browser(page)


@pytest_asyncio.fixture
async def renderer(
    test_settings: Settings, template_cache: TemplateCache, browser: MagicMock
) -> AsyncGenerator[PlaywrightRenderer, None]:
    """Renderer with an already launched mock browser."""
    instance = PlaywrightRenderer({}, settings=test_settings, template_cache=template_cache)
    instance.browsers.browser = browser
    yield instance
    await instance.close()
