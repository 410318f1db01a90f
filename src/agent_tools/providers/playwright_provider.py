"""Headless Chromium page renderer built on Playwright."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

from playwright.async_api import Browser, Playwright, async_playwright

from agent_tools.providers.base import PageProvider, RenderResult

logger = logging.getLogger(__name__)

LAUNCH_ARGS = ["--no-sandbox", "--disable-gpu"]


class PlaywrightProvider(PageProvider):
    """Render pages with headless Chromium.

    Two modes are supported:

    - isolated (default): every call launches its own browser process and
      closes it when the page has been captured.
    - shared: one browser process is launched on first use and reused; each
      call still gets a fresh browser context. ``close()`` must be awaited
      on shutdown to stop the browser.

    In both modes at most ``max_concurrency`` renders run at the same time.
    """

    def __init__(
        self,
        timeout_ms: int = 90000,
        wait_until: str = "networkidle",
        max_concurrency: int = 4,
        shared_browser: bool = False,
        headless: bool = True,
    ) -> None:
        """Initialize the Playwright provider.

        Args:
            timeout_ms: Navigation timeout in milliseconds (default: 90000)
            wait_until: Load state to wait for (default: networkidle)
            max_concurrency: Maximum simultaneous renders (default: 4)
            shared_browser: Reuse one browser process across calls (default: False)
            headless: Run the browser without a window (default: True)
        """
        self.timeout_ms = timeout_ms
        self.wait_until = wait_until
        self.max_concurrency = max_concurrency
        self.shared_browser = shared_browser
        self.headless = headless

        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._launch_lock = asyncio.Lock()
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None

        logger.info(
            f"PlaywrightProvider initialized (shared_browser={shared_browser}, "
            f"max_concurrency={max_concurrency}, timeout_ms={timeout_ms})"
        )

    async def _launch(self, playwright: Playwright) -> Browser:
        return await playwright.chromium.launch(headless=self.headless, args=LAUNCH_ARGS)

    async def _get_shared_browser(self) -> Browser:
        async with self._launch_lock:
            if self._browser is None or not self._browser.is_connected():
                if self._playwright is None:
                    self._playwright = await async_playwright().start()
                self._browser = await self._launch(self._playwright)
                logger.info("Launched shared Chromium browser")
            return self._browser

    async def _capture(self, browser: Browser, url: str, timeout_ms: int, wait_until: str) -> RenderResult:
        context = await browser.new_context()
        try:
            page = await context.new_page()
            start = time.perf_counter()
            response = await page.goto(url, wait_until=wait_until, timeout=timeout_ms)
            html = await page.content()

            return RenderResult(
                url=url,
                html=html,
                final_url=page.url,
                status_code=response.status if response is not None else None,
                metadata={"elapsed_ms": (time.perf_counter() - start) * 1000},
            )
        finally:
            await context.close()

    async def render(self, url: str, **kwargs: Any) -> RenderResult:
        """Render a URL in headless Chromium.

        Args:
            url: The URL to render
            **kwargs: Additional options
                - timeout_ms: Navigation timeout in milliseconds
                - wait_until: Load state to wait for

        Returns:
            RenderResult with the rendered document and the final URL

        Raises:
            playwright.async_api.Error: If the browser fails to launch or navigate
        """
        timeout_ms = kwargs.get("timeout_ms", self.timeout_ms)
        wait_until = kwargs.get("wait_until", self.wait_until)

        async with self._semaphore:
            logger.debug(f"Rendering {url} (wait_until={wait_until})")

            if self.shared_browser:
                browser = await self._get_shared_browser()
                return await self._capture(browser, url, timeout_ms, wait_until)

            async with async_playwright() as playwright:
                browser = await self._launch(playwright)
                try:
                    return await self._capture(browser, url, timeout_ms, wait_until)
                finally:
                    await browser.close()

    async def close(self) -> None:
        """Stop the shared browser and the Playwright driver, if running."""
        async with self._launch_lock:
            if self._browser is not None:
                await self._browser.close()
                self._browser = None
                logger.info("Closed shared Chromium browser")
            if self._playwright is not None:
                await self._playwright.stop()
                self._playwright = None
