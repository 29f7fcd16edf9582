"""
Browser Manager
===============

Owns the single Playwright browser used for screenshots. The browser is launched
lazily, shared by concurrent renders, dropped when it disconnects, and recycled
on request so a long-lived process does not slow down over time.
"""

from typing import Any, Optional, Set
import asyncio

from playwright.async_api import async_playwright, Browser, Playwright

from pw_renderer.config.logging import get_logger
from pw_renderer.core.rendering.errors import BrowserLaunchError
from pw_renderer.models.schemas import RendererConfig


class BrowserManager:
    """Lazy, single-flight browser lifecycle."""

    def __init__(self, config: RendererConfig, logger: Any = None):
        self.config = config
        self.browser: Optional[Browser] = None
        self.logger: Any = (logger or get_logger(__name__)).bind(component="browser_manager")
        self._playwright: Optional[Playwright] = None
        self._launching: Optional["asyncio.Future[Optional[Browser]]"] = None
        self._tasks: Set[asyncio.Task] = set()

    async def browser_init(self) -> Optional[Browser]:
        """
        Return the live browser, launching it if needed.

        Callers arriving while a launch is pending await that same launch.

        Returns:
            The browser, or None if the launch failed
        """
        if self._launching is not None:
            return await asyncio.shield(self._launching)

        if self.browser is not None:
            return self.browser

        self._launching = asyncio.ensure_future(self._launch())
        return await asyncio.shield(self._launching)

    async def _launch(self) -> Optional[Browser]:
        try:
            self.browser = await self._start_browser()
            return self.browser
        except Exception as e:
            self.logger.error(
                "Browser launch failed", browser_type=self.config.browser_type, error=str(e)
            )
            return None
        finally:
            self._launching = None

    async def _start_browser(self) -> Browser:
        try:
            if self._playwright is None:
                self._playwright = await async_playwright().start()

            engine = getattr(self._playwright, self.config.browser_type)
            browser = await engine.launch(**self.config.launch_options())
        except Exception as e:
            raise BrowserLaunchError(f"Failed to launch {self.config.browser_type}: {e}") from e

        browser.on("disconnected", self._on_disconnected)
        self.logger.info(
            "Browser launched", browser_type=self.config.browser_type, headless=self.config.headless
        )
        return browser

    def _on_disconnected(self, browser: Browser) -> None:
        if self.browser is browser:
            self.browser = None
            self.logger.error("Browser closed or crashed")

    async def discard(self) -> None:
        """Close the current browser and forget it; the next render relaunches."""
        browser, self.browser = self.browser, None
        if browser is None:
            return
        try:
            await browser.close()
        except Exception as e:
            self.logger.error("Failed to close browser", error=str(e))

    def schedule_recycle(self, delay: float) -> None:
        """Close the browser after ``delay`` seconds without blocking the caller."""
        task = asyncio.get_running_loop().create_task(self._recycle(delay))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _recycle(self, delay: float) -> None:
        await asyncio.sleep(delay)
        await self.discard()
        self.logger.info("Browser closed for restart")

    async def close(self) -> None:
        """Cancel pending recycles, close the browser and stop Playwright."""
        for task in list(self._tasks):
            task.cancel()
        await self.discard()

        if self._playwright is not None:
            playwright, self._playwright = self._playwright, None
            await playwright.stop()
