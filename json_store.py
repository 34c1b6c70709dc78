from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def read_json(path: Path, *, strict: bool = False) -> Any | None:
    """
    Read JSON from disk.

    Returns None for missing or empty files. Invalid JSON also returns None,
    unless `strict` is set, in which case the JSONDecodeError propagates.
    """
    if not path.exists():
        return None
    raw = path.read_text(encoding="utf-8")
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        if strict:
            raise
        logger.warning("JSON STORE: ignoring unreadable file %s", path)
        return None


def atomic_write_json(path: Path, payload: Any, *, indent: int = 2, sort_keys: bool = False) -> None:
    """
    Atomically write JSON to disk by writing to a temp file then replacing.

    Keys are written in insertion order by default so ordered maps round-trip.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=indent, sort_keys=sort_keys)
        f.write("\n")
    tmp_path.replace(path)
