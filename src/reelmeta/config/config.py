"""
Configuration management for reelmeta using Pydantic.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Setup Logging ---
log = logging.getLogger(__name__)

# --- Nested Configuration Models ---


class BrowserConfig(BaseModel):
    """Headless browser session configuration."""

    headless: bool = Field(default=True, description="Run Chromium without a visible window.")
    launch_args: List[str] = Field(
        default_factory=lambda: [
            "--no-sandbox",
            "--disable-setuid-sandbox",
            "--disable-dev-shm-usage",
            "--disable-accelerated-2d-canvas",
            "--no-first-run",
            "--no-zygote",
            "--disable-gpu",
        ],
        description="Extra command-line flags passed to Chromium.",
    )
    user_agent: Optional[str] = Field(default=None, description="Override the browser User-Agent.")
    navigation_timeout: float = Field(default=20.0, gt=0, description="Page navigation deadline in seconds.")
    ready_selector: str = Field(
        default='video, [role="dialog"]',
        description="Selector that signals the reel has rendered.",
    )
    ready_timeout: float = Field(default=8.0, gt=0, description="Seconds to wait for ready_selector.")
    fallback_ready_timeout: float = Field(default=5.0, gt=0, description="Seconds to wait for <body> instead.")
    settle_delay: float = Field(default=2.0, ge=0, description="Pause after load for late client-side rendering.")
    max_retries: int = Field(default=2, ge=0, description="Navigation retries after the first attempt.")
    retry_backoff: float = Field(default=1.0, ge=0, description="Linear backoff step between retries in seconds.")
    handler_timeout: float = Field(default=30.0, gt=0, description="Deadline for one navigate-and-extract attempt.")


class ExtractionSettings(BaseModel):
    """Tunables for the field-resolution strategies."""

    reel_path_segment: str = Field(default="reel", description="Path segment every reel URL must carry.")
    audio_sentinel: str = Field(default="Audio not detected", description="Value used when no audio is found.")
    caption_selectors: List[str] = Field(
        default_factory=lambda: ["h1._ap3a._aaco._aacu._aacx._aad7._aade"],
        description="Designated caption containers, tried first.",
    )
    generic_caption_selectors: List[str] = Field(
        default_factory=lambda: [
            'h1[dir="auto"]',
            "h1",
            'span[dir="auto"]',
            'div[class*="caption"] span',
            "article span",
        ],
        description="Generic heading/text elements scanned for a caption.",
    )
    caption_markers: List[str] = Field(
        default_factory=lambda: ["🕹", "🤖", "🎥", "❤️", "#", "rock"],
        description="Emoji or keywords a bare page-text line needs to count as a caption.",
    )
    max_title_length: int = Field(default=100, gt=0, description="Longest first caption line kept as title.")

    @field_validator("caption_selectors", "generic_caption_selectors", "caption_markers")
    @classmethod
    def validate_not_empty(cls, v: List[str]) -> List[str]:
        """Ensure selector and marker lists are not empty."""
        if not v:
            raise ValueError("list must contain at least one entry")
        return v

    @field_validator("reel_path_segment")
    @classmethod
    def strip_slashes(cls, v: str) -> str:
        v = v.strip("/")
        if not v:
            raise ValueError("reel_path_segment must not be empty")
        return v


class StorageConfig(BaseModel):
    """Where input documents are read from and records are written to."""

    dataset_path: Path = Field(
        default=Path("./storage/datasets/default"),
        description="Directory receiving one JSON file per extracted record.",
    )
    input_path: Path = Field(
        default=Path("./storage/key_value_stores/default/INPUT.json"),
        description='JSON document of the form {"url": "..."}.',
    )


class MonitoringConfig(BaseModel):
    """Configuration for logging."""

    log_level: str = Field(default="INFO", description="Logging level (e.g., DEBUG, INFO, WARNING).")
    log_file: str | None = Field(default=None, description="Path to log file. If None, logs to console.")

    @field_validator("log_file", mode="before")
    @classmethod
    def create_parent_dir(cls, v: str | Path | None) -> str | None:
        if v is None:
            return None
        path = Path(v)
        path.parent.mkdir(parents=True, exist_ok=True)
        return str(path)


# --- Main Configuration Class ---


class Config(BaseSettings):
    project_name: str = "reelmeta"
    version: str = "0.1.0"
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    model_config = SettingsConfigDict(env_prefix="REELMETA_", env_nested_delimiter="__", case_sensitive=False)

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        log.debug("Loading configuration from YAML file: %s", path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found or is not a file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
        if not yaml_data:
            log.warning("Configuration file is empty: %s. Using default settings.", path)
            return cls.model_validate({})
        return cls.model_validate(yaml_data)


def find_config_file() -> Path | None:
    current_dir = Path.cwd()
    for path in (current_dir / "config.yaml", current_dir / "config.yml"):
        if path.exists():
            return path
    return None


def load_config(path: Path | None = None) -> Config:
    """Load configuration from ``path``, a discovered config file, or defaults."""
    config_path = path or find_config_file()
    if config_path:
        log.info("Loading configuration from: %s", config_path)
        return Config.from_yaml(config_path)
    log.info("No config file found. Using default settings.")
    return Config()
