"""
Unit tests for MetricsExtractor.
"""

import pytest
from reelmeta.extractor.chain import ExtractionContext
from reelmeta.extractor.metrics_extractor import (
    INTERACTIVE_LABEL_SELECTOR,
    METRIC_SPECS,
    MetricsExtractor,
    count_from_label,
    find_count,
)

from tests.helpers import FakeDocument, FakeElement

REEL_URL = "https://www.example.com/reel/ABC123/"


def make_context(text: str = "", elements=None) -> ExtractionContext:
    document = FakeDocument(REEL_URL, text=text, elements=elements)
    return ExtractionContext(document=document, page_text=text, url=REEL_URL)


class TestCountHelpers:
    def test_find_count_large_literal(self):
        assert find_count("817,242 likes", METRIC_SPECS["likes"].large_pattern) == 817242

    def test_large_literal_ignores_tail_of_longer_number(self):
        assert find_count("1,234,567 views", METRIC_SPECS["views"].large_pattern) == 1234567

    def test_find_count_no_match(self):
        assert find_count("no numbers", METRIC_SPECS["likes"].large_pattern) is None

    @pytest.mark.parametrize(
        "metric, label, expected",
        [
            ("likes", "1,204 likes", 1204),
            ("likes", "Like: 3.4K", 3400),
            ("likes", "Liked by 5 people", None),
            ("comments", "Comment", None),
            ("likes", "Share 12", None),
            ("likes", None, None),
            ("views", "2.5M plays", 2500000),
            ("views", "View all 318 comments", None),
            ("views", "View replies (3)", None),
            ("views", "Autoplay 3", None),
            ("comments", "View all 318 comments", 318),
        ],
    )
    def test_count_from_label(self, metric, label, expected):
        assert count_from_label(label, METRIC_SPECS[metric].label_pattern) == expected

    @pytest.mark.parametrize(
        "metric, text",
        [
            ("likes", "12 likeable moments"),
            ("views", "3 viewsonic monitors"),
            ("comments", "5 commentsection"),
        ],
    )
    def test_keyword_inside_longer_word_is_rejected(self, metric, text):
        spec = METRIC_SPECS[metric]
        for pattern in (spec.large_pattern,) + spec.compact_patterns:
            assert find_count(text, pattern) is None


class TestMetricsExtractor:
    """Test cases for MetricsExtractor."""

    @pytest.fixture
    def extractor(self):
        return MetricsExtractor()

    @pytest.mark.asyncio
    async def test_large_literals(self, extractor):
        context = make_context("1,234,567 views\n42,000 likes\n2,345 comments")

        outcomes = await extractor.extract_all(context)

        assert outcomes["views"].value == 1234567
        assert outcomes["likes"].value == 42000
        assert outcomes["comments"].value == 2345
        assert all(o.strategy == "large_literal" for o in outcomes.values())

    @pytest.mark.asyncio
    async def test_compact_literals(self, extractor):
        context = make_context("1.2K likes\n2.5M plays\nView all 318 comments")

        outcomes = await extractor.extract_all(context)

        assert outcomes["likes"].value == 1200
        assert outcomes["views"].value == 2500000
        assert outcomes["comments"].value == 318
        assert outcomes["likes"].strategy == "compact_literal"

    @pytest.mark.asyncio
    async def test_liked_by_others(self, extractor):
        outcome = await extractor.extract("likes", make_context("Liked by alice and 1,024 others"))

        assert outcome.value == 1024

    @pytest.mark.asyncio
    async def test_singular_keyword(self, extractor):
        outcome = await extractor.extract("likes", make_context("1 like"))

        assert outcome.value == 1

    @pytest.mark.asyncio
    async def test_comment_count_element(self, extractor):
        context = make_context("", {'a[href*="/comments/"] span': [FakeElement("318")]})

        outcome = await extractor.extract("comments", context)

        assert outcome.value == 318
        assert outcome.strategy == "count_element"

    @pytest.mark.asyncio
    async def test_aria_label_fallback(self, extractor):
        context = make_context(
            "",
            {
                INTERACTIVE_LABEL_SELECTOR: [
                    FakeElement(None, {"aria-label": "Share"}),
                    FakeElement(None, {"aria-label": "Like: 3.4K"}),
                ]
            },
        )

        outcome = await extractor.extract("likes", context)

        assert outcome.value == 3400
        assert outcome.strategy == "aria_label"

    @pytest.mark.asyncio
    async def test_missing_metrics_stay_unmatched(self, extractor):
        """Test that absence is reported as no match rather than zero."""
        outcomes = await extractor.extract_all(make_context("42,000 likes"))

        assert outcomes["likes"].value == 42000
        assert not outcomes["views"].matched
        assert not outcomes["comments"].matched

    @pytest.mark.asyncio
    async def test_zero_count_is_kept(self, extractor):
        outcome = await extractor.extract("comments", make_context("0 comments"))

        assert outcome.matched
        assert outcome.value == 0

    def test_only_comments_has_count_element_strategy(self, extractor):
        assert "count_element" in extractor.chains["comments"].strategy_names
        assert "count_element" not in extractor.chains["likes"].strategy_names

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "text, metric, expected",
        [
            ("sunset.chaser42,000 likes2 days", "likes", 42000),
            ("Original audio1.2M playsShare", "views", 1200000),
            ("1,234,567 viewsLike", "views", 1234567),
            ("View all 318 commentsAdd a comment", "comments", 318),
        ],
    )
    async def test_keyword_runs_into_next_text_node(self, extractor, text, metric, expected):
        """Test body text joined without separators, as textContent returns it."""
        outcome = await extractor.extract(metric, make_context(text))

        assert outcome.value == expected

    @pytest.mark.asyncio
    async def test_comments_label_is_not_a_views_label(self, extractor):
        context = make_context(
            "",
            {INTERACTIVE_LABEL_SELECTOR: [FakeElement(None, {"aria-label": "View all 318 comments"})]},
        )

        outcomes = await extractor.extract_all(context)

        assert not outcomes["views"].matched
        assert outcomes["comments"].value == 318
