"""
reelmeta - Best-effort metadata extraction for short-video reel pages.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import Config
from .extractor import ExtractionResult, ReelExtractor
from .pipeline import Pipeline

__all__ = ["__version__", "Config", "ExtractionResult", "Pipeline", "ReelExtractor"]
