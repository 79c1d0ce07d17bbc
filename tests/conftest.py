"""
Test configuration for reelmeta.

Provides synthetic reel documents and isolated configuration so the
extraction pipeline can be exercised without a browser.
"""

# Standard library imports
from pathlib import Path
from typing import Callable

# Third-party imports
import pytest

# Local imports
from reelmeta.config import Config, StorageConfig
from reelmeta.extractor import ReelExtractor

from tests.helpers import FakeDocument

REEL_URL = "https://www.example.com/reel/ABC123/"

# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests across modules")


# ============================================================================
# Core Test Fixtures
# ============================================================================


@pytest.fixture
def reel_url() -> str:
    return REEL_URL


@pytest.fixture
def make_document() -> Callable[..., FakeDocument]:
    """Factory for documents that landed on the requested reel."""

    def _make(text: str = "", elements=None, url: str = REEL_URL, **kwargs) -> FakeDocument:
        return FakeDocument(url, text=text, elements=elements, **kwargs)

    return _make


@pytest.fixture
def extractor() -> ReelExtractor:
    return ReelExtractor()


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Configuration with storage redirected to a temporary directory and no delays."""
    config = Config(
        storage=StorageConfig(
            dataset_path=tmp_path / "datasets" / "default",
            input_path=tmp_path / "key_value_stores" / "default" / "INPUT.json",
        ),
    )
    config.browser.settle_delay = 0
    config.browser.retry_backoff = 0
    return config


@pytest.fixture
def sample_reel_html() -> str:
    """A saved reel page with every field present."""
    return """
<!DOCTYPE html>
<html lang="en">
<head>
    <title>Reel</title>
    <script>window.__data = {"likes": "999 likes"};</script>
</head>
<body>
    <header>
        <h2><a href="/explore/">Explore</a></h2>
        <a href="/sunset.chaser/">sunset.chaser</a>
    </header>
    <main>
        <article>
            <h1 class="_ap3a _aaco _aacu _aacx _aad7 _aade">Golden hour at the pier 🎥
shot on a phone</h1>
            <a href="/reels/audio/12345/">Lofi Beats • Evening Drive</a>
            <section>
                <span>1,234,567 views</span>
                <span>42,000 likes</span>
                <a href="/reel/ABC123/comments/"><span>View all 318 comments</span></a>
            </section>
        </article>
    </main>
</body>
</html>
"""
