"""
Validity predicates shared by the field extractors.

Reel pages surround the interesting text with navigation chrome ("Follow",
"Log in", "Sign up") and engagement counters; these helpers keep that noise
out of usernames and captions.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional
from urllib.parse import urljoin, urlparse

from ..security.validation import bare_host
from .models import Caption

BULLET = "•"

# Strings that only ever appear in page chrome.
CHROME_STRINGS = ("Follow", "Sign", "Log", BULLET)

# Caption candidates must not contain any of these.
CAPTION_EXCLUSIONS = ("likes", "views", "comments", "Follow", BULLET, "Sign", "Log")

# Audio "Artist • Track" candidates are rejected when they contain these.
AUDIO_EXCLUSIONS = ("Sign", "Log", "Follow", "Verified")

# First path segments that are site sections rather than profiles.
RESERVED_PATH_SEGMENTS = frozenset(
    {
        "accounts",
        "login",
        "signup",
        "explore",
        "reel",
        "reels",
        "audio",
        "p",
        "stories",
        "direct",
        "about",
        "legal",
        "developer",
        "tv",
        "web",
    }
)

HANDLE_PATTERN = re.compile(r"^[A-Za-z0-9._]{2,30}$")

MAX_USERNAME_LENGTH = 30
MIN_CAPTION_LENGTH = 10
MAX_CAPTION_LINE_LENGTH = 200
MIN_CONTAINER_TITLE_LENGTH = 3


def contains_any(text: str, needles: Iterable[str]) -> bool:
    return any(needle in text for needle in needles)


def is_valid_username(candidate: Optional[str]) -> bool:
    """Non-empty, shorter than 30 characters and free of chrome strings."""
    if not candidate:
        return False
    candidate = candidate.strip()
    return 1 < len(candidate) < MAX_USERNAME_LENGTH and not contains_any(candidate, CHROME_STRINGS)


def handle_from_href(href: Optional[str], base_url: str) -> Optional[str]:
    """
    Extract a profile handle from a link target.

    Only single-segment paths on the page's own site qualify
    (``/someone/`` or ``https://www.site.com/someone``); reserved site
    sections such as ``/explore/`` or the reel path itself are rejected.
    """
    if not href:
        return None

    absolute = urljoin(base_url, href.strip())
    parsed = urlparse(absolute)
    if parsed.scheme not in ("http", "https"):
        return None
    if bare_host(parsed.netloc) != bare_host(urlparse(base_url).netloc):
        return None

    segments = [s for s in parsed.path.split("/") if s]
    if len(segments) != 1:
        return None

    handle = segments[0]
    if handle.lower() in RESERVED_PATH_SEGMENTS:
        return None
    if not HANDLE_PATTERN.match(handle):
        return None
    return handle


def is_navigable_profile_href(href: Optional[str]) -> bool:
    """Loose pre-filter for links worth reading text from: relative, not root, not account pages."""
    if not href or not href.startswith("/") or href == "/":
        return False
    return not contains_any(href, ("accounts", "login", "signup"))


def is_caption_candidate(text: Optional[str], username: Optional[str] = None) -> bool:
    if not text:
        return False
    stripped = text.strip()
    if len(stripped) <= MIN_CAPTION_LENGTH:
        return False
    if contains_any(stripped, CAPTION_EXCLUSIONS):
        return False
    return stripped != username


def has_caption_marker(line: str, markers: Iterable[str]) -> bool:
    lowered = line.lower()
    return any(marker.lower() in lowered for marker in markers)


def derive_title(description: str, max_length: int = 100, min_length: int = 0) -> Optional[str]:
    """First trimmed line of a caption, if its length is within bounds."""
    first_line = description.strip().split("\n", 1)[0].strip()
    if min_length < len(first_line) <= max_length:
        return first_line
    return None


def make_caption(text: str, max_title_length: int = 100, min_title_length: int = 0) -> Caption:
    description = text.strip()
    return Caption(
        description=description,
        title=derive_title(description, max_title_length, min_title_length),
    )
