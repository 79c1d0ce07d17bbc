#!/usr/bin/env python3
"""
Production entry point for reelmeta.

Reads the run input ({"url": "..."}) from the configured input path (or the
REELMETA_INPUT_PATH environment variable), scrapes the reel and stores one
record in the dataset directory.
"""

from __future__ import annotations

import asyncio
import os
import signal
import sys
from pathlib import Path

import structlog
from reelmeta.config.config import load_config
from reelmeta.observability.logging import configure_logging
from reelmeta.pipeline import Pipeline

logger = structlog.get_logger(__name__)


def signal_handler(signum: int, frame) -> None:
    """Handle shutdown signals gracefully."""
    logger.info(f"Received signal {signum}, shutting down")
    raise KeyboardInterrupt


signal.signal(signal.SIGTERM, signal_handler)


async def main() -> int:
    """Main entry point."""
    config_path = os.getenv("REELMETA_CONFIG")
    config = load_config(Path(config_path) if config_path else None)
    configure_logging(config.monitoring)

    input_path = os.getenv("REELMETA_INPUT_PATH")
    if input_path:
        config.storage.input_path = Path(input_path)

    try:
        result = await Pipeline(config).run()
    except (FileNotFoundError, ValueError) as e:
        logger.error("Cannot start run", error=str(e))
        return 2

    logger.info("Extracted reel data", **result.to_record())
    return 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, shutting down")
        sys.exit(130)
