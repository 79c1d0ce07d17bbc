from .documents import FakeDocument, FakeElement, link
from .sessions import FakeSession

__all__ = ["FakeDocument", "FakeElement", "FakeSession", "link"]
