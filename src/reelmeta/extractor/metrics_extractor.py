"""
Engagement Metrics Extractor - Likes, Views and Comments

Each metric is resolved independently through its own strategy chain, so a
page that exposes likes but hides views still yields a partial result.
All counts go through ``parse_count``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Pattern, Tuple

from .chain import ChainOutcome, ExtractionContext, Strategy, StrategyChain
from .numbers import COUNT_PATTERN, LARGE_COUNT_PATTERN, parse_count

METRIC_NAMES = ("likes", "views", "comments")

INTERACTIVE_LABEL_SELECTOR = 'button[aria-label], a[aria-label], [role="button"][aria-label]'

# Page text is the concatenated textContent of the body, so a keyword may run
# straight into the next node ("42,000 likes2 days", "1.2M playsShare"). Only a
# lower-case continuation means the keyword is part of a longer word.
KEYWORD_END = r"(?-i:(?![a-z]))"

_COUNT_IN_TEXT: Pattern[str] = re.compile(COUNT_PATTERN, re.IGNORECASE)


@dataclass(frozen=True)
class MetricSpec:
    """Text patterns and DOM hooks for one engagement metric."""

    name: str
    # Keyword right after a comma-grouped literal, e.g. "817,242 likes"
    large_pattern: Pattern[str]
    # Compact literals and keyword synonyms, tried in order
    compact_patterns: Tuple[Pattern[str], ...]
    # Count next to the metric word in an accessibility label
    label_pattern: Pattern[str]
    # Elements whose text is the count itself
    count_selectors: Tuple[str, ...] = field(default_factory=tuple)


def _compile(pattern: str) -> Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


def _label_pattern(keywords: str) -> Pattern[str]:
    # "1,204 likes" or "Like: 3.4K"; "View all 318 comments" is not a views label
    return _compile(rf"{COUNT_PATTERN}\s*(?:{keywords})\b|\b(?:{keywords})\b\W*{COUNT_PATTERN}")


METRIC_SPECS: Dict[str, MetricSpec] = {
    "likes": MetricSpec(
        name="likes",
        large_pattern=_compile(LARGE_COUNT_PATTERN + r"\s*likes?" + KEYWORD_END),
        compact_patterns=(
            _compile(COUNT_PATTERN + r"\s*likes?" + KEYWORD_END),
            _compile(r"Liked by\s+.*?and\s+" + COUNT_PATTERN + r"\s*others" + KEYWORD_END),
        ),
        label_pattern=_label_pattern(r"likes?"),
    ),
    "views": MetricSpec(
        name="views",
        large_pattern=_compile(LARGE_COUNT_PATTERN + r"\s*views?" + KEYWORD_END),
        compact_patterns=(_compile(COUNT_PATTERN + r"\s*(?:views?|plays?)" + KEYWORD_END),),
        label_pattern=_label_pattern(r"views?|plays?"),
    ),
    "comments": MetricSpec(
        name="comments",
        large_pattern=_compile(LARGE_COUNT_PATTERN + r"\s*comments?" + KEYWORD_END),
        compact_patterns=(_compile(r"(?:View all\s+)?" + COUNT_PATTERN + r"\s*comments?" + KEYWORD_END),),
        label_pattern=_label_pattern(r"comments?"),
        count_selectors=('a[href*="/comments/"] span',),
    ),
}


def find_count(text: str, pattern: Pattern[str]) -> Optional[int]:
    """Parse the first count captured by ``pattern`` in ``text``."""
    match = pattern.search(text)
    if not match:
        return None
    return parse_count(match.group(1))


def count_from_label(label: Optional[str], pattern: Pattern[str]) -> Optional[int]:
    """Count carried by an accessibility label such as "1,204 likes" or "Like: 3.4K"."""
    if not label:
        return None
    match = pattern.search(label)
    if not match:
        return None
    return parse_count(next(group for group in match.groups() if group is not None))


class MetricsExtractor:
    """
    Per-metric resolution in priority order:

    1. ``large_literal``: comma-grouped number next to the keyword
    2. ``compact_literal``: "1.2K likes", "Liked by x and N others",
       "N plays", "View all N comments"
    3. ``count_element``: text of a dedicated count element (comments only)
    4. ``aria_label``: accessibility label of an interactive control
    """

    def __init__(self, specs: Optional[Dict[str, MetricSpec]] = None) -> None:
        self.specs = specs or METRIC_SPECS
        self.chains: Dict[str, StrategyChain[int]] = {name: self._build_chain(spec) for name, spec in self.specs.items()}

    def _build_chain(self, spec: MetricSpec) -> StrategyChain[int]:
        strategies: List[Strategy[int]] = [
            Strategy("large_literal", lambda ctx: find_count(ctx.page_text, spec.large_pattern)),
            Strategy("compact_literal", lambda ctx: self._from_compact_patterns(ctx.page_text, spec)),
        ]
        if spec.count_selectors:
            strategies.append(Strategy("count_element", lambda ctx: self._from_count_elements(ctx, spec)))
        strategies.append(Strategy("aria_label", lambda ctx: self._from_aria_labels(ctx, spec)))
        return StrategyChain(spec.name, strategies, is_valid=lambda value: value >= 0)

    async def extract(self, name: str, context: ExtractionContext) -> ChainOutcome[int]:
        return await self.chains[name].resolve(context)

    async def extract_all(self, context: ExtractionContext) -> Dict[str, ChainOutcome[int]]:
        return {name: await self.extract(name, context) for name in self.chains}

    @staticmethod
    def _from_compact_patterns(text: str, spec: MetricSpec) -> Optional[int]:
        for pattern in spec.compact_patterns:
            count = find_count(text, pattern)
            if count is not None:
                return count
        return None

    @staticmethod
    async def _from_count_elements(context: ExtractionContext, spec: MetricSpec) -> Optional[int]:
        for selector in spec.count_selectors:
            element = await context.document.query_selector(selector)
            if element is None:
                continue
            match = _COUNT_IN_TEXT.search(await element.text_content() or "")
            if match:
                return parse_count(match.group(1))
        return None

    @staticmethod
    async def _from_aria_labels(context: ExtractionContext, spec: MetricSpec) -> Optional[int]:
        for control in await context.document.query_selector_all(INTERACTIVE_LABEL_SELECTOR):
            count = count_from_label(await control.get_attribute("aria-label"), spec.label_pattern)
            if count is not None:
                return count
        return None
