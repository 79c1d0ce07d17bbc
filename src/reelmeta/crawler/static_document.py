"""
selectolax-backed document for extraction from saved HTML.

Lets the extractor run against a page captured earlier (or rendered by
another tool) without starting a browser.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from selectolax.parser import HTMLParser, Node

# Removed before reading text so inline code never reaches the text strategies
NON_CONTENT_TAGS = ["script", "style", "noscript", "template"]


class StaticElement:
    """Wraps a selectolax ``Node`` in the ``Element`` protocol."""

    def __init__(self, node: Node) -> None:
        self._node = node

    async def text_content(self) -> Optional[str]:
        return self._node.text(deep=True)

    async def get_attribute(self, name: str) -> Optional[str]:
        return self._node.attributes.get(name)

    def __repr__(self) -> str:
        return f"StaticElement(<{self._node.tag}>)"


class StaticDocument:
    """
    ``Document`` over an HTML string.

    Page text is joined with newlines between text nodes, which approximates
    the line structure a browser would render.
    """

    def __init__(self, html: str, url: str) -> None:
        self._url = url
        self._tree = HTMLParser(html)
        self._tree.strip_tags(NON_CONTENT_TAGS)

    @classmethod
    def from_file(cls, path: Path, url: str, encoding: str = "utf-8") -> StaticDocument:
        return cls(Path(path).read_text(encoding=encoding), url)

    @property
    def url(self) -> str:
        return self._url

    async def text_content(self, selector: str) -> Optional[str]:
        node = self._tree.css_first(selector)
        if node is None:
            return None
        return node.text(deep=True, separator="\n")

    async def query_selector(self, selector: str) -> Optional[StaticElement]:
        node = self._tree.css_first(selector)
        return StaticElement(node) if node is not None else None

    async def query_selector_all(self, selector: str) -> List[StaticElement]:
        return [StaticElement(node) for node in self._tree.css(selector)]
