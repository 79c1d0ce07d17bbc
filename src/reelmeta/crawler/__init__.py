"""
Page retrieval for reelmeta: a Playwright-driven browser session for live
pages and a selectolax document for saved HTML.
"""

from .browser import BrowserSession, NavigationError
from .scraper import ReelScraper
from .static_document import StaticDocument, StaticElement

__all__ = [
    "BrowserSession",
    "NavigationError",
    "ReelScraper",
    "StaticDocument",
    "StaticElement",
]
