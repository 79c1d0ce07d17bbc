"""
reelmeta Extraction Module - Prioritized Partial-Data Extraction

Resolves four groups of reel metadata from a rendered page:

1. Username: profile links, header region, link text
2. Engagement: likes, views and comments, each with its own chain
3. Audio: attribution link, "Artist • Track" text, status phrases, sentinel
4. Caption/Title: caption container, generic elements, marked text lines

Every field is resolved by an ordered ``StrategyChain`` that stops at the
first valid value, so any subset of fields may come back populated.
"""

from .audio_extractor import AudioExtractor
from .caption_extractor import CaptionExtractor
from .chain import ChainOutcome, ExtractionContext, Strategy, StrategyChain
from .metrics_extractor import MetricsExtractor, MetricSpec
from .models import Caption, ExtractionResult
from .numbers import parse_count
from .reel_extractor import ExtractionAborted, ReelExtractor
from .username_extractor import UsernameExtractor

__all__ = [
    "ReelExtractor",
    "ExtractionAborted",
    "ExtractionResult",
    "Caption",
    "ExtractionContext",
    "Strategy",
    "StrategyChain",
    "ChainOutcome",
    "UsernameExtractor",
    "AudioExtractor",
    "MetricsExtractor",
    "MetricSpec",
    "CaptionExtractor",
    "parse_count",
]
