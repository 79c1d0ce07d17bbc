"""
Reel metadata extraction over a rendered document.

Coordinates the per-field extractors. Missing data never raises: a field
that no strategy can resolve is simply left unset (or set to its sentinel).
Only conditions that make the whole page untrustworthy abort the run, and
those are reported through ``ExtractionResult.error``.
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional

import structlog

from ..config.config import ExtractionSettings
from ..protocols import Document
from ..security.validation import host_of, is_reel_url
from .audio_extractor import AudioExtractor
from .caption_extractor import CaptionExtractor
from .chain import ExtractionContext
from .metrics_extractor import MetricsExtractor
from .models import ExtractionResult
from .username_extractor import UsernameExtractor

logger = structlog.get_logger(__name__)


class ExtractionAborted(RuntimeError):
    """Raised when the document cannot be trusted to describe the requested reel."""

    pass


class ReelExtractor:
    """
    Resolves an ``ExtractionResult`` from a rendered reel page.

    Field order: username, likes/views/comments, audio, caption. The
    caption strategies need the resolved username to exclude it.
    """

    def __init__(self, settings: Optional[ExtractionSettings] = None) -> None:
        self.settings = settings or ExtractionSettings()
        self.logger = logger.bind(component="ReelExtractor")

        self.username_extractor = UsernameExtractor()
        self.metrics_extractor = MetricsExtractor()
        self.audio_extractor = AudioExtractor(sentinel=self.settings.audio_sentinel)
        self.caption_extractor = CaptionExtractor(
            container_selectors=self.settings.caption_selectors,
            generic_selectors=self.settings.generic_caption_selectors,
            markers=self.settings.caption_markers,
            max_title_length=self.settings.max_title_length,
        )

    async def extract(self, document: Document, url: str, result: Optional[ExtractionResult] = None) -> ExtractionResult:
        """
        Extract reel metadata from ``document``.

        Args:
            document: Rendered page to read from
            url: Requested reel URL, echoed in the result
            result: Record to fill in; a fresh one is created when omitted

        Returns:
            The record, with ``error`` set if extraction aborted
        """
        result = result or ExtractionResult(url=url)
        start_time = time.perf_counter()

        try:
            context = await self._build_context(document, url)
            await self._resolve_fields(context, result)
        except ExtractionAborted as e:
            result.error = str(e)
            self.logger.warning("Extraction aborted", url=url, error=result.error)
            return result

        self.logger.info(
            "Extraction completed",
            url=url,
            fields=sorted(k for k in result.to_record() if k != "url"),
            extraction_time=time.perf_counter() - start_time,
        )
        return result

    async def _build_context(self, document: Document, url: str) -> ExtractionContext:
        final_url = document.url
        if not is_reel_url(final_url, self.settings.reel_path_segment, expected_host=host_of(url)):
            raise ExtractionAborted(f"Redirected away from reel: {final_url}")

        try:
            page_text = await document.text_content("body")
        except Exception as e:
            raise ExtractionAborted(f"Could not read page content: {e}") from e

        self.logger.debug("Page text captured", url=url, length=len(page_text or ""))
        return ExtractionContext(document=document, page_text=page_text or "", url=final_url)

    async def _resolve_fields(self, context: ExtractionContext, result: ExtractionResult) -> None:
        username = await self.username_extractor.extract(context)
        if username.matched:
            result.username = context.username = username.value

        for name, outcome in (await self.metrics_extractor.extract_all(context)).items():
            if outcome.matched:
                setattr(result, name, outcome.value)

        result.audio_used = (await self.audio_extractor.extract(context)).value

        caption = await self.caption_extractor.extract(context)
        if caption.matched and caption.value is not None:
            result.apply_caption(caption.value)

    def get_metrics(self) -> Dict[str, Any]:
        """Per-field, per-strategy counters accumulated across extractions."""
        metrics: Dict[str, Any] = {
            "username": self.username_extractor.chain.get_metrics(),
            "audio": self.audio_extractor.chain.get_metrics(),
            "caption": self.caption_extractor.chain.get_metrics(),
        }
        for name, chain in self.metrics_extractor.chains.items():
            metrics[name] = chain.get_metrics()
        return metrics
