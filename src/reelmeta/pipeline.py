"""
Single-run pipeline: input -> browser -> extraction -> dataset.
"""

from __future__ import annotations

from typing import Optional

import structlog

from .config.config import Config
from .crawler.scraper import ReelScraper
from .extractor.models import ExtractionResult
from .storage.dataset import DatasetWriter, InputStore

logger = structlog.get_logger(__name__)


class Pipeline:
    """
    Runs one reel through scraping and persists the record.

    The record is stored whatever the outcome, so every run leaves exactly
    one item in the dataset.
    """

    def __init__(
        self,
        config: Config,
        scraper: Optional[ReelScraper] = None,
        writer: Optional[DatasetWriter] = None,
    ) -> None:
        self.config = config
        self.scraper = scraper or ReelScraper(config)
        self.writer = writer or DatasetWriter(config.storage.dataset_path)

    async def run(self, url: Optional[str] = None) -> ExtractionResult:
        """
        Scrape ``url`` (or the URL from the input document) and store the record.

        Raises:
            FileNotFoundError: If no URL is given and the input document is missing
            ValueError: If no URL is given and the input document is invalid
        """
        if url is None:
            url = InputStore(self.config.storage.input_path).read_url()

        logger.info("Starting to scrape reel", url=url)
        async with self.scraper:
            result = await self.scraper.scrape(url)

        await self.writer.push(result)
        return result
