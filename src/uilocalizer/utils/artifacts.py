"""
JSON artifact helpers shared by all pipeline stages.

Every stage rewrites its artifacts as a whole file through a temporary file
in the same directory, so an interrupted run leaves either the previous
content or the new content on disk, never a partial write.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    """Return the current UTC time in ISO 8601 format with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def read_json(path: Path) -> object:
    """
    Read and decode a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file is not valid JSON
    """
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)  # pyright: ignore[reportAny]


def write_json(path: Path, data: object) -> None:
    """Write ``data`` as pretty-printed UTF-8 JSON using an atomic replace."""
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as temp_file:
            temp_path = Path(temp_file.name)
            json.dump(data, temp_file, indent=2, ensure_ascii=False)
            _ = temp_file.write("\n")
        _ = os.replace(temp_path, path)
    except Exception:
        if temp_path is not None and temp_path.exists():
            temp_path.unlink()
        raise

    logger.debug(f"Wrote {path}")


def write_text(path: Path, content: str) -> None:
    """Write a text artifact (e.g. a Markdown summary)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_text(content, encoding="utf-8")
    logger.debug(f"Wrote {path}")
