"""
Data models for reel extraction results.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

# Output keys in the order records are persisted.
RECORD_KEYS = (
    "url",
    "username",
    "audioUsed",
    "likes",
    "views",
    "comments",
    "title",
    "description",
    "error",
)


@dataclass(slots=True, frozen=True)
class Caption:
    """A resolved caption and the title derived from its first line."""

    description: str
    title: Optional[str] = None


@dataclass(slots=True)
class ExtractionResult:
    """Best-effort metadata for one reel.

    Created with only ``url`` set and filled field by field while the
    extractor runs. ``None`` always means "not found", never zero.
    """

    url: str
    username: Optional[str] = None
    audio_used: Optional[str] = None
    likes: Optional[int] = None
    views: Optional[int] = None
    comments: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    error: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the result."""
        if not self.url:
            raise ValueError("ExtractionResult requires a url")
        for name in ("likes", "views", "comments"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must be non-negative")

    @property
    def failed(self) -> bool:
        return self.error is not None

    def apply_caption(self, caption: Caption) -> None:
        self.description = caption.description
        self.title = caption.title

    def to_record(self) -> Dict[str, Any]:
        """Serialize to the persisted mapping, omitting fields that were not found."""
        values = {
            "url": self.url,
            "username": self.username,
            "audioUsed": self.audio_used,
            "likes": self.likes,
            "views": self.views,
            "comments": self.comments,
            "title": self.title,
            "description": self.description,
            "error": self.error,
        }
        return {key: values[key] for key in RECORD_KEYS if values[key] is not None}

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> ExtractionResult:
        known = {f.name for f in fields(cls)}
        kwargs = {("audio_used" if key == "audioUsed" else key): value for key, value in record.items()}
        return cls(**{k: v for k, v in kwargs.items() if k in known})
