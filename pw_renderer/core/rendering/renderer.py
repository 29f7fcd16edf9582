"""
Playwright Renderer
===================

Renders a template to HTML, opens it in the shared browser and captures the
content as one image or as a stack of fixed-height page slices.
"""

from typing import Any, Dict, List, Mapping, Optional, Union
from pathlib import Path
import asyncio
import math
import time

from playwright.async_api import Browser, ElementHandle, Page
from pydantic import ValidationError

from pw_renderer.config.logging import get_logger
from pw_renderer.config.settings import Settings, get_settings
from pw_renderer.core.rendering.browser_manager import BrowserManager
from pw_renderer.core.rendering.errors import RenderError
from pw_renderer.core.rendering.template_cache import TemplateCache
from pw_renderer.models.schemas import RenderJob, RendererConfig, ScreenshotOptions

RenderResult = Union[bytes, List[bytes], bool]


def page_count(content_height: float, page_height: int) -> int:
    """Number of slices for paginated capture, rounded half up, at least one."""
    return max(math.floor(content_height / page_height + 0.5), 1)


def _kb(buff: bytes) -> str:
    return f"{len(buff) / 1024:.2f}kb"


class PlaywrightRenderer:
    """Template-to-image renderer backed by a single recycled browser."""

    def __init__(
        self,
        config: Union[RendererConfig, Mapping[str, Any], None] = None,
        settings: Optional[Settings] = None,
        logger: Any = None,
        template_cache: Optional[TemplateCache] = None,
        browser_manager: Optional[BrowserManager] = None,
    ):
        if not isinstance(config, RendererConfig):
            config = RendererConfig.model_validate(dict(config or {}))
        self.config = config
        self.settings = settings or get_settings()
        base_logger = logger or get_logger(__name__)
        self.logger: Any = base_logger.bind(component="renderer")

        self.templates = template_cache or TemplateCache(self.settings, logger=base_logger)
        self.browsers = browser_manager or BrowserManager(self.config, logger=base_logger)

        # screenshots taken before the browser is recycled
        self.restart_num = self.settings.restart_num
        self.render_num = 0
        self.shoting: List[str] = []

        self.settings.temp_html_path.mkdir(parents=True, exist_ok=True)

    async def browser_init(self) -> Optional[Browser]:
        """Return the live browser or None if it could not be launched."""
        return await self.browsers.browser_init()

    def deal_tpl(self, name: str, data: Mapping[str, Any]) -> Union[Path, bool]:
        """Render the job's template to disk and return the HTML path."""
        return self.templates.deal_tpl(name, data)

    async def screenshot(self, name: str, data: Optional[Dict[str, Any]] = None) -> RenderResult:
        """
        Render a template and capture it.

        Args:
            name: Render name, also the output subdirectory for the HTML
            data: Job data; see ``RenderJob`` for recognised keys, the rest is
                passed to the template

        Returns:
            Image bytes, a list of image bytes when ``multiPage`` is set, or
            False if any step failed
        """
        data = data or {}
        browser = await self.browser_init()
        if not browser:
            return False

        try:
            job = RenderJob.model_validate(data)
        except ValidationError as e:
            self.logger.error("Invalid render job", name=name, error=str(e))
            return False

        save_path = self.deal_tpl(name, data)
        if not save_path:
            return False

        start = time.monotonic()
        ret: List[bytes] = []
        self.shoting.append(name)

        try:
            page = await browser.new_page()
            await page.goto((Path.cwd() / save_path).as_uri(), **job.page_goto_params)
            body = await page.query_selector("#container") or await page.query_selector("body")
            if body is None:
                raise RenderError("Rendered page has no body")

            bounding_box = await body.bounding_box()
            if not bounding_box:
                raise RenderError("Content element is not visible")

            options = job.screenshot_options()
            if not job.multi_page:
                buff = await body.screenshot(**options.as_kwargs())
                self.logger.info(
                    "Image rendered",
                    name=name,
                    count=self.render_num,
                    size=_kb(buff),
                    elapsed_ms=round((time.monotonic() - start) * 1000),
                )
                self.render_num += 1
                ret.append(buff)
            else:
                ret = await self._capture_pages(name, page, body, bounding_box, job, options)

            await self._close_page(page)
        except Exception as e:
            self.logger.error("Image render failed", name=name, error=str(e))
            await self.browsers.discard()
            return False
        finally:
            self.shoting.remove(name)

        if not ret or not ret[0]:
            self.logger.error("Image render returned nothing", name=name)
            return False

        self.restart()

        return ret if job.multi_page else ret[0]

    async def _capture_pages(
        self,
        name: str,
        page: Page,
        body: ElementHandle,
        bounding_box: Dict[str, float],
        job: RenderJob,
        options: ScreenshotOptions,
    ) -> List[bytes]:
        page_height = job.multi_page_height or self.settings.multi_page_height
        width = int(bounding_box["width"])
        height = bounding_box["height"]
        num = page_count(height, page_height)
        kwargs = options.as_kwargs()
        ret: List[bytes] = []

        if num > 1:
            await page.set_viewport_size({"width": width, "height": page_height + 100})

        for i in range(1, num + 1):
            if i != 1 and i == num:
                await page.set_viewport_size(
                    {"width": width, "height": int(height) - page_height * (num - 1)}
                )
            if i != 1:
                await page.evaluate("pageHeight => window.scrollBy(0, pageHeight)", page_height)

            if num == 1:
                buff = await body.screenshot(**kwargs)
            else:
                buff = await page.screenshot(**kwargs)
            if num > 2:
                await asyncio.sleep(self.settings.multi_page_throttle)
            self.render_num += 1

            self.logger.info("Image page rendered", name=name, page=f"{i}/{num}", size=_kb(buff))
            ret.append(buff)

        if num > 1:
            self.logger.info("Paginated render complete", name=name, pages=num)
        return ret

    async def _close_page(self, page: Page) -> None:
        try:
            await page.close()
        except Exception as e:
            self.logger.error("Failed to close page", error=str(e))

    def restart(self) -> bool:
        """
        Recycle the browser every ``restart_num`` screenshots.

        Skipped, not deferred, while another render is in flight.

        Returns:
            True if a recycle was scheduled
        """
        if self.render_num % self.restart_num != 0 or self.shoting:
            return False

        self.browsers.schedule_recycle(self.settings.restart_delay)
        self.logger.info("Browser restart scheduled", render_num=self.render_num)
        return True

    async def close(self) -> None:
        """Stop watching templates and shut the browser down."""
        self.templates.close()
        await self.browsers.close()
