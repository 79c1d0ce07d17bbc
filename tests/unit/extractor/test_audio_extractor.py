"""
Unit tests for AudioExtractor.
"""

import pytest
from reelmeta.extractor.audio_extractor import AudioExtractor, find_audio_pair, find_audio_status
from reelmeta.extractor.chain import ExtractionContext

from tests.helpers import FakeDocument, link

REEL_URL = "https://www.example.com/reel/ABC123/"


def make_context(text: str = "", elements=None) -> ExtractionContext:
    document = FakeDocument(REEL_URL, text=text, elements=elements)
    return ExtractionContext(document=document, page_text=text, url=REEL_URL)


class TestAudioPatterns:
    def test_artist_track_pair(self):
        assert find_audio_pair("Lofi Beats • Evening Drive") == "Lofi Beats • Evening Drive"

    def test_pair_with_chrome_is_rejected(self):
        assert find_audio_pair("Verified Artist • Follow Now") is None

    def test_no_pair(self):
        assert find_audio_pair("no separator here") is None

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Original audio", "Original audio"),
            ("clip\nAudio is muted\n", "Audio is muted"),
            ("Tap for SOUND ON", "SOUND ON"),
            ("Sound off", "Sound off"),
        ],
    )
    def test_status_phrases(self, text, expected):
        assert find_audio_status(text) == expected

    def test_no_status(self):
        assert find_audio_status("nothing to hear") is None


class TestAudioExtractor:
    """Test cases for AudioExtractor."""

    @pytest.mark.asyncio
    async def test_audio_link_text_is_verbatim(self):
        context = make_context(
            "Original audio",
            {'a[href*="/reels/audio/"]': [link("/reels/audio/1/", "  Artist • Song  ")]},
        )

        outcome = await AudioExtractor().extract(context)

        assert outcome.value == "Artist • Song"
        assert outcome.strategy == "audio_link"

    @pytest.mark.asyncio
    async def test_pair_beats_status_phrase(self):
        context = make_context("Original audio\n—\nLofi Beats • Evening Drive")

        outcome = await AudioExtractor().extract(context)

        assert outcome.strategy == "artist_track"
        assert "Lofi Beats" in outcome.value

    @pytest.mark.asyncio
    async def test_status_phrase(self):
        outcome = await AudioExtractor().extract(make_context("42 likes\nOriginal audio"))

        assert outcome.value == "Original audio"

    @pytest.mark.asyncio
    async def test_sentinel_when_nothing_matches(self):
        """Test that the field always carries a value."""
        outcome = await AudioExtractor().extract(make_context("just some words"))

        assert outcome.value == "Audio not detected"
        assert not outcome.matched

    @pytest.mark.asyncio
    async def test_custom_sentinel(self):
        outcome = await AudioExtractor(sentinel="unknown").extract(make_context(""))

        assert outcome.value == "unknown"
