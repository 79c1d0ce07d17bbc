"""
End-to-end reel scraping: validate, load, extract.

Every call to ``ReelScraper.scrape`` yields exactly one ``ExtractionResult``,
whether the run succeeded, partially succeeded or failed outright.
"""

from __future__ import annotations

import asyncio
import time
from typing import Optional

import structlog
from structlog.contextvars import bound_contextvars

from ..config.config import Config
from ..extractor.models import ExtractionResult
from ..extractor.reel_extractor import ReelExtractor
from ..security.validation import URLValidationError, validate_reel_url
from .browser import BrowserSession, NavigationError

logger = structlog.get_logger(__name__)


class ReelScraper:
    """
    Scrapes reel pages through a shared ``BrowserSession``.

    Features:
    - Input URL validated before the browser is touched
    - Bounded navigation retries with linear backoff
    - Per-attempt deadline covering load and extraction
    - Failures reported in the record rather than raised
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        session: Optional[BrowserSession] = None,
        extractor: Optional[ReelExtractor] = None,
    ) -> None:
        self.config = config or Config()
        self.session = session or BrowserSession(self.config.browser)
        self.extractor = extractor or ReelExtractor(self.config.extraction)
        self.logger = logger.bind(component="ReelScraper")

    async def __aenter__(self) -> ReelScraper:
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        await self.session.close()

    async def scrape(self, url: str) -> ExtractionResult:
        """
        Scrape a single reel.

        Args:
            url: Reel URL, e.g. https://www.instagram.com/reel/<id>/

        Returns:
            One record; ``error`` is set when the run aborted
        """
        with bound_contextvars(target_url=url):
            try:
                url = validate_reel_url(url, self.config.extraction.reel_path_segment)
            except URLValidationError as e:
                self.logger.error("Invalid input URL", url=url, error=str(e))
                return ExtractionResult(url=url or "<missing>", error=str(e))

            return await self._scrape_with_retries(url)

    async def _scrape_with_retries(self, url: str) -> ExtractionResult:
        browser_config = self.config.browser
        attempts = browser_config.max_retries + 1
        last_error = "Unknown error occurred"

        for attempt in range(1, attempts + 1):
            start_time = time.perf_counter()
            try:
                result = await asyncio.wait_for(self._attempt(url), timeout=browser_config.handler_timeout)
            except NavigationError as e:
                last_error = str(e)
            except asyncio.TimeoutError:
                last_error = f"Timed out after {browser_config.handler_timeout}s processing {url}"
            except Exception as e:
                last_error = str(e) or type(e).__name__
                self.logger.error("Unexpected error while scraping", url=url, attempt=attempt, exc_info=True)
            else:
                self.logger.info(
                    "Reel processed",
                    url=url,
                    attempt=attempt,
                    failed=result.failed,
                    duration=time.perf_counter() - start_time,
                )
                return result

            self.logger.warning(
                "Scrape attempt failed",
                url=url,
                attempt=attempt,
                max_attempts=attempts,
                error=last_error,
            )
            if attempt < attempts and browser_config.retry_backoff:
                await asyncio.sleep(browser_config.retry_backoff * attempt)

        self.logger.error("Giving up on reel", url=url, attempts=attempts, error=last_error)
        return ExtractionResult(url=url, error=last_error)

    async def _attempt(self, url: str) -> ExtractionResult:
        # Started lazily so invalid input never launches a browser
        if not self.session.is_running:
            await self.session.start()
        async with self.session.open_page(url) as page:
            return await self.extractor.extract(page, url)
