"""
Protocols for the rendered documents that reel extraction runs against.

The shapes mirror Playwright's async ``Page`` and
``ElementHandle`` so a live page can be handed to the extractor as-is,
while saved HTML (see ``reelmeta.crawler.static_document``) and in-memory
test fixtures implement the same surface.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class Element(Protocol):
    """A single node returned by a selector query."""

    async def text_content(self) -> Optional[str]:
        """Return the node's text content, or None when it has none."""
        ...

    async def get_attribute(self, name: str) -> Optional[str]:
        """Return the raw attribute value, or None when unset."""
        ...


@runtime_checkable
class Document(Protocol):
    """A rendered page: final URL, text snapshot and selector queries."""

    @property
    def url(self) -> str:
        """Final resolved URL after any redirects."""
        ...

    async def text_content(self, selector: str) -> Optional[str]:
        """Return the text content of the first node matching ``selector``."""
        ...

    async def query_selector(self, selector: str) -> Optional[Element]:
        ...

    async def query_selector_all(self, selector: str) -> Sequence[Element]:
        ...
