"""
File-based dataset and input storage.

Records are stored one per JSON file with zero-padded sequence numbers
(``000000001.json``, ``000000002.json``, ...), the layout used by local
actor storage, so a dataset directory can be consumed by the same tools.
"""

from __future__ import annotations

import asyncio
import json
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List

import structlog

from ..extractor.models import ExtractionResult
from ..utils.atomic import atomic_write_json

logger = structlog.get_logger(__name__)

RECORD_FILE_PATTERN = re.compile(r"^(\d{9})\.json$")


class DatasetWriter:
    """Appends extraction records to a dataset directory."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._lock = asyncio.Lock()

    def _next_index(self) -> int:
        if not self.path.is_dir():
            return 1
        indices = [
            int(match.group(1)) for match in (RECORD_FILE_PATTERN.match(p.name) for p in self.path.iterdir()) if match
        ]
        return max(indices, default=0) + 1

    async def push(self, result: ExtractionResult) -> Path:
        """
        Persist one record.

        Returns:
            Path of the written record file
        """
        record = result.to_record()
        async with self._lock:
            target = self.path / f"{self._next_index():09d}.json"
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(None, atomic_write_json, target, record)

        logger.info("Record stored", path=str(target), has_error=result.failed)
        return target

    def iter_records(self) -> Iterator[Dict[str, Any]]:
        if not self.path.is_dir():
            return
        for file_path in sorted(p for p in self.path.iterdir() if RECORD_FILE_PATTERN.match(p.name)):
            with open(file_path, "r", encoding="utf-8") as f:
                yield json.load(f)

    def read_all(self) -> List[Dict[str, Any]]:
        return list(self.iter_records())


class InputStore:
    """Reads the run input document, ``{"url": "..."}``."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def read(self) -> Dict[str, Any]:
        """
        Load the input document.

        Raises:
            FileNotFoundError: If the input file does not exist
            ValueError: If the input is empty, not an object or has no url
        """
        if not self.path.is_file():
            raise FileNotFoundError(f"Input is missing: {self.path}")

        with open(self.path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Input is not valid JSON: {e}") from e

        if not isinstance(data, dict) or not data:
            raise ValueError("Input is missing!")
        if not data.get("url"):
            raise ValueError("Input has no 'url'")
        return data

    def read_url(self) -> str:
        return str(self.read()["url"])
