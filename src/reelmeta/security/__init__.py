"""Input validation for reelmeta."""

from .validation import URLValidationError, host_of, is_reel_url, validate_reel_url

__all__ = ["URLValidationError", "host_of", "is_reel_url", "validate_reel_url"]
