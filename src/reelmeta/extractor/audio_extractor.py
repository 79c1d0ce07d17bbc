"""
Audio Extractor - Sound Attribution Detection

Finds the audio track credited on a reel. The field is never left empty:
when nothing matches, the configured sentinel is used instead.
"""

from __future__ import annotations

import re
from typing import List, Optional, Pattern

from .chain import ChainOutcome, ExtractionContext, Strategy, StrategyChain
from .filters import AUDIO_EXCLUSIONS, contains_any

AUDIO_LINK_SELECTORS: List[str] = [
    'a[href*="/reels/audio/"]',
    'a[href*="/audio/"]',
]

# "Artist • Track"
AUDIO_PAIR_PATTERN: Pattern[str] = re.compile(r"([A-Za-z][A-Za-z0-9\s]{2,30})\s*•\s*([A-Za-z][A-Za-z0-9\s]{2,30})")
MAX_AUDIO_PAIR_LENGTH = 100

AUDIO_STATUS_PATTERNS: List[Pattern[str]] = [
    re.compile(r"Original audio", re.IGNORECASE),
    re.compile(r"Audio is muted", re.IGNORECASE),
    re.compile(r"Sound on", re.IGNORECASE),
    re.compile(r"Sound off", re.IGNORECASE),
]

DEFAULT_AUDIO_SENTINEL = "Audio not detected"


def find_audio_pair(text: str) -> Optional[str]:
    """First "Artist • Track" run in ``text`` that is not page chrome."""
    for match in AUDIO_PAIR_PATTERN.finditer(text):
        candidate = match.group(0).strip()
        if len(candidate) < MAX_AUDIO_PAIR_LENGTH and not contains_any(candidate, AUDIO_EXCLUSIONS):
            return candidate
    return None


def find_audio_status(text: str) -> Optional[str]:
    """First known audio status phrase, as it is written on the page."""
    for pattern in AUDIO_STATUS_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(0)
    return None


class AudioExtractor:
    """
    Audio resolution in priority order:

    1. ``audio_link``: text of a link to an audio attribution page, verbatim
    2. ``artist_track``: an "Artist • Track" pattern in the page text
    3. ``status_phrase``: "Original audio", "Audio is muted", "Sound on/off"
    """

    def __init__(self, sentinel: str = DEFAULT_AUDIO_SENTINEL, link_selectors: Optional[List[str]] = None) -> None:
        self.sentinel = sentinel
        self.link_selectors = link_selectors or list(AUDIO_LINK_SELECTORS)
        self.chain: StrategyChain[str] = StrategyChain(
            "audio",
            [
                Strategy("audio_link", self._from_audio_link),
                Strategy("artist_track", lambda ctx: find_audio_pair(ctx.page_text)),
                Strategy("status_phrase", lambda ctx: find_audio_status(ctx.page_text)),
            ],
            is_valid=lambda value: bool(value.strip()),
        )

    async def extract(self, context: ExtractionContext) -> ChainOutcome[str]:
        outcome = await self.chain.resolve(context)
        if not outcome.matched:
            return ChainOutcome(value=self.sentinel)
        return outcome

    async def _from_audio_link(self, context: ExtractionContext) -> Optional[str]:
        for selector in self.link_selectors:
            link = await context.document.query_selector(selector)
            if link is None:
                continue
            text = await link.text_content()
            if text and text.strip():
                return text.strip()
        return None
