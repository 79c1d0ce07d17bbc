"""
Caption Extractor - Description and Title Resolution

The caption becomes the record's description; its first line, when short
enough, becomes the title.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

import structlog

from .chain import ChainOutcome, ExtractionContext, Strategy, StrategyChain
from .filters import (
    MAX_CAPTION_LINE_LENGTH,
    MIN_CAPTION_LENGTH,
    MIN_CONTAINER_TITLE_LENGTH,
    has_caption_marker,
    is_caption_candidate,
    make_caption,
)
from .models import Caption

logger = structlog.get_logger(__name__)


def find_caption_line(
    text: str,
    markers: Iterable[str],
    username: Optional[str] = None,
) -> Optional[str]:
    """
    Scan page text line by line for something that reads like a caption.

    A line qualifies when it is 10-200 characters long, carries at least one
    marker (emoji or topical keyword) and passes the caption exclusion filter.
    """
    markers = list(markers)
    for line in text.split("\n"):
        clean_line = line.strip()
        if not MIN_CAPTION_LENGTH < len(clean_line) < MAX_CAPTION_LINE_LENGTH:
            continue
        if not is_caption_candidate(clean_line, username):
            continue
        if has_caption_marker(clean_line, markers):
            return clean_line
    return None


class CaptionExtractor:
    """
    Caption resolution in priority order:

    1. ``caption_container``: the designated caption element
    2. ``generic_element``: headings and text spans that look like a caption
    3. ``text_line``: a marked line in the page text
    """

    def __init__(
        self,
        container_selectors: List[str],
        generic_selectors: List[str],
        markers: List[str],
        max_title_length: int = 100,
    ) -> None:
        self.container_selectors = container_selectors
        self.generic_selectors = generic_selectors
        self.markers = markers
        self.max_title_length = max_title_length
        self.logger = logger.bind(component="CaptionExtractor")
        self.chain: StrategyChain[Caption] = StrategyChain(
            "caption",
            [
                Strategy("caption_container", self._from_container),
                Strategy("generic_element", self._from_generic_elements),
                Strategy("text_line", self._from_text_lines),
            ],
            is_valid=lambda caption: bool(caption.description),
        )

    async def extract(self, context: ExtractionContext) -> ChainOutcome[Caption]:
        return await self.chain.resolve(context)

    async def _from_container(self, context: ExtractionContext) -> Optional[Caption]:
        for selector in self.container_selectors:
            element = await context.document.query_selector(selector)
            if element is None:
                continue
            text = await element.text_content()
            if text and text.strip():
                return make_caption(text, self.max_title_length, MIN_CONTAINER_TITLE_LENGTH)
        return None

    async def _from_generic_elements(self, context: ExtractionContext) -> Optional[Caption]:
        for selector in self.generic_selectors:
            try:
                elements = await context.document.query_selector_all(selector)
            except Exception as e:
                self.logger.debug("Caption selector failed", selector=selector, error=str(e))
                continue

            for element in elements:
                text = await element.text_content()
                if is_caption_candidate(text, context.username):
                    return make_caption(text, self.max_title_length)  # type: ignore[arg-type]
        return None

    def _from_text_lines(self, context: ExtractionContext) -> Optional[Caption]:
        line = find_caption_line(context.page_text, self.markers, context.username)
        if line is None:
            return None
        return make_caption(line, self.max_title_length)
