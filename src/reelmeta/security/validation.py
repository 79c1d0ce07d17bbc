"""
Input validation for reel URLs.

Validates the target before any browser session starts and re-checks the
landing URL after navigation to detect redirects (login walls, removed
content, region blocks).
"""

from __future__ import annotations

import re
from urllib.parse import urlparse


class URLValidationError(ValueError):
    """Raised when URL validation fails."""

    pass


MAX_URL_LENGTH = 2048


def _reel_url_pattern(path_segment: str) -> re.Pattern[str]:
    # scheme://www.<site>.<tld>/<segment>/<opaque-id>
    return re.compile(
        rf"^https?://www\.[A-Za-z0-9-]+(?:\.[A-Za-z0-9-]+)*\.[A-Za-z]{{2,}}/{re.escape(path_segment)}/[^/?#\s]+/?(?:[?#]\S*)?$"
    )


def validate_reel_url(url: str, path_segment: str = "reel") -> str:
    """
    Validate a reel URL given as input.

    Returns:
        The stripped URL

    Raises:
        URLValidationError: If the URL does not point at a single reel
    """
    if not isinstance(url, str) or not url.strip():
        raise URLValidationError("URL is missing")

    url = url.strip()
    if len(url) > MAX_URL_LENGTH:
        raise URLValidationError(f"URL exceeds maximum length of {MAX_URL_LENGTH}")

    if not _reel_url_pattern(path_segment).match(url):
        raise URLValidationError(f"Invalid reel URL provided: {url}")

    return url


def is_reel_url(url: str, path_segment: str = "reel", expected_host: str | None = None) -> bool:
    """
    Check whether a landing URL still points at reel content.

    When ``expected_host`` is given the landing host must match it, ignoring
    a leading ``www.``.
    """
    if not url:
        return False
    try:
        parsed = urlparse(url)
    except ValueError:
        return False

    segments = [s for s in parsed.path.split("/") if s]
    if path_segment not in segments:
        return False

    if expected_host is not None:
        return bare_host(parsed.netloc) == bare_host(expected_host)
    return True


def host_of(url: str) -> str:
    return urlparse(url).netloc.lower()


def bare_host(netloc: str) -> str:
    netloc = netloc.lower()
    return netloc[4:] if netloc.startswith("www.") else netloc
