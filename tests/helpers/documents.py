"""In-memory documents implementing the reelmeta ``Document`` protocol."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional


class FakeElement:
    def __init__(self, text: Optional[str] = None, attributes: Optional[Dict[str, str]] = None) -> None:
        self.text = text
        self.attributes = attributes or {}

    async def text_content(self) -> Optional[str]:
        return self.text

    async def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def __repr__(self) -> str:
        return f"FakeElement({self.text!r}, {self.attributes!r})"


def link(href: str, text: Optional[str] = None) -> FakeElement:
    return FakeElement(text, {"href": href})


class FakeDocument:
    """
    Document whose selector results are given up front.

    ``elements`` maps a selector string exactly as the extractor issues it
    to the elements it should return. Selectors in ``failing_selectors``
    raise, imitating a detached node or an unsupported selector.
    """

    def __init__(
        self,
        url: str,
        text: str = "",
        elements: Optional[Dict[str, List[FakeElement]]] = None,
        failing_selectors: Iterable[str] = (),
        text_error: Optional[Exception] = None,
    ) -> None:
        self._url = url
        self.text = text
        self.elements = elements or {}
        self.failing_selectors = set(failing_selectors)
        self.text_error = text_error
        self.queries: List[str] = []

    @property
    def url(self) -> str:
        return self._url

    async def text_content(self, selector: str) -> Optional[str]:
        if self.text_error is not None:
            raise self.text_error
        return self.text if selector == "body" else None

    async def query_selector(self, selector: str) -> Optional[FakeElement]:
        found = await self.query_selector_all(selector)
        return found[0] if found else None

    async def query_selector_all(self, selector: str) -> List[FakeElement]:
        self.queries.append(selector)
        if selector in self.failing_selectors:
            raise RuntimeError(f"selector failed: {selector}")
        return list(self.elements.get(selector, []))
