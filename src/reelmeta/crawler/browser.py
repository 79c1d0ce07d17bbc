"""
Headless Chromium session management with Playwright.

Owns the browser lifecycle and page loading. A loaded Playwright ``Page``
already satisfies the ``Document`` protocol and is handed to the extractor
unchanged.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

import structlog
from playwright.async_api import Browser, BrowserContext, Page, async_playwright
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from ..config.config import BrowserConfig

logger = structlog.get_logger(__name__)


class NavigationError(RuntimeError):
    """Raised when the target page cannot be reached or rendered."""

    pass


class BrowserSession:
    """
    One Chromium instance shared by every page opened through it.

    Usage::

        async with BrowserSession(config) as session:
            async with session.open_page(url) as page:
                ...
    """

    def __init__(self, config: Optional[BrowserConfig] = None) -> None:
        self.config = config or BrowserConfig()
        self._playwright: Any = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None

    async def __aenter__(self) -> BrowserSession:
        await self.start()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    @property
    def is_running(self) -> bool:
        return self._context is not None

    async def start(self) -> None:
        if self.is_running:
            return

        context_options: dict[str, Any] = {}
        if self.config.user_agent:
            context_options["user_agent"] = self.config.user_agent

        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self.config.headless,
                args=self.config.launch_args,
            )
            self._context = await self._browser.new_context(**context_options)
        except PlaywrightError as e:
            await self.close()
            raise NavigationError(f"Could not launch browser: {e}") from e

        logger.info("Browser session started", headless=self.config.headless)

    async def close(self) -> None:
        if self._context is not None:
            await self._context.close()
            self._context = None
        if self._browser is not None:
            await self._browser.close()
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
        logger.debug("Browser session closed")

    @asynccontextmanager
    async def open_page(self, url: str) -> AsyncIterator[Page]:
        """Open ``url`` in a new tab and yield it once rendered; the tab is closed afterwards."""
        if self._context is None:
            raise RuntimeError("BrowserSession is not started")

        try:
            page = await self._context.new_page()
        except PlaywrightError as e:
            raise NavigationError(f"Could not open a page for {url}: {e}") from e

        try:
            await self.load(page, url)
            yield page
        finally:
            try:
                await page.close()
            except PlaywrightError as e:
                # Browser may already be gone
                logger.warning("Page close failed", url=url, error=str(e))

    async def load(self, page: Page, url: str) -> None:
        """
        Navigate and wait for the reel to render.

        Raises:
            NavigationError: If navigation fails or times out
        """
        try:
            await page.goto(
                url,
                wait_until="domcontentloaded",
                timeout=self.config.navigation_timeout * 1000,
            )
        except (PlaywrightTimeoutError, PlaywrightError) as e:
            raise NavigationError(f"Navigation to {url} failed: {e}") from e

        try:
            await page.wait_for_selector(self.config.ready_selector, timeout=self.config.ready_timeout * 1000)
            logger.debug("Ready selector found", selector=self.config.ready_selector)
        except PlaywrightTimeoutError:
            logger.debug("Ready selector not found, waiting for body", selector=self.config.ready_selector)
            try:
                await page.wait_for_selector("body", timeout=self.config.fallback_ready_timeout * 1000)
            except PlaywrightTimeoutError as e:
                raise NavigationError(f"Page at {url} did not render: {e}") from e

        if self.config.settle_delay:
            await asyncio.sleep(self.config.settle_delay)
