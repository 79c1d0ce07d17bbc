"""
Atomic JSON file writes.

Records are written to a temporary file in the target directory and moved
into place with ``os.replace``, so readers never see a half-written record.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict

import structlog

logger = structlog.get_logger(__name__)


def atomic_write_json(target_path: Path, data: Dict[str, Any]) -> None:
    """
    Atomically write JSON data to a file.

    Args:
        target_path: Target file path to write to
        data: Dictionary data to serialize as JSON

    Raises:
        OSError: If the file cannot be written or moved into place
        ValueError: If data cannot be serialized to JSON
    """
    target_path = Path(target_path)
    target_path.parent.mkdir(parents=True, exist_ok=True)

    # Serialize data first to catch JSON errors early
    try:
        json_content = json.dumps(data, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        logger.error("Failed to serialize data to JSON", error=str(e))
        raise ValueError(f"Cannot serialize data to JSON: {e}") from e

    temp_file_path = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=target_path.parent,
            prefix=f".{target_path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        ) as temp_file:
            temp_file_path = Path(temp_file.name)
            temp_file.write(json_content)
            temp_file.flush()
            os.fsync(temp_file.fileno())

        os.replace(str(temp_file_path), str(target_path))
        logger.debug("Atomic write completed", target=str(target_path))

    except OSError as e:
        logger.error("Atomic write failed", target=str(target_path), error=str(e))
        raise

    finally:
        if temp_file_path and temp_file_path.exists():
            try:
                temp_file_path.unlink()
            except OSError:
                pass
