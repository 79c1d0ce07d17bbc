"""
Username Extractor - Multi-Strategy Account Handle Identification

Resolves the reel author's handle from profile links, the header region and,
as a last resort, the visible text of profile-looking links.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .chain import ChainOutcome, ExtractionContext, Strategy, StrategyChain
from .filters import handle_from_href, is_navigable_profile_href, is_valid_username

logger = logging.getLogger(__name__)

PROFILE_LINK_SELECTOR = 'a[href^="/"], a[href^="http"]'

HEADER_SELECTORS: List[str] = [
    "header h2 a",
    "header h1 a",
    'header a[href^="/"]',
]


class UsernameExtractor:
    """
    Username resolution in priority order:

    1. ``profile_link``: a link whose target is a single, non-reserved path
       segment on the page's own site
    2. ``header``: link target or text inside the page header
    3. ``link_text``: visible text of any profile-looking link
    """

    def __init__(self, header_selectors: Optional[List[str]] = None) -> None:
        self.header_selectors = header_selectors or list(HEADER_SELECTORS)
        self.chain: StrategyChain[str] = StrategyChain(
            "username",
            [
                Strategy("profile_link", self._from_profile_links),
                Strategy("header", self._from_header),
                Strategy("link_text", self._from_link_text),
            ],
            is_valid=is_valid_username,
        )

    async def extract(self, context: ExtractionContext) -> ChainOutcome[str]:
        return await self.chain.resolve(context)

    async def _from_profile_links(self, context: ExtractionContext) -> Optional[str]:
        for link in await context.document.query_selector_all(PROFILE_LINK_SELECTOR):
            handle = handle_from_href(await link.get_attribute("href"), context.url)
            if handle and is_valid_username(handle):
                return handle
        return None

    async def _from_header(self, context: ExtractionContext) -> Optional[str]:
        for selector in self.header_selectors:
            try:
                element = await context.document.query_selector(selector)
            except Exception as e:
                # An unsupported selector only rules out this one
                logger.debug(f"Header selector {selector!r} failed: {e}")
                continue
            if element is None:
                continue

            handle = handle_from_href(await element.get_attribute("href"), context.url)
            if handle:
                return handle

            text = await element.text_content()
            if is_valid_username(text):
                return text.strip()  # type: ignore[union-attr]
        return None

    async def _from_link_text(self, context: ExtractionContext) -> Optional[str]:
        for link in await context.document.query_selector_all('a[href^="/"]'):
            if not is_navigable_profile_href(await link.get_attribute("href")):
                continue
            text = await link.text_content()
            if is_valid_username(text):
                return text.strip()  # type: ignore[union-attr]
        return None
