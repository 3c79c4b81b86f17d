#!/usr/bin/env python3
"""
Daily Engine JSON stores (v1)

File format is a plain JSON array, pretty-printed with 2-space indent.

- load: missing file or malformed JSON -> []
- append: load all, append in memory, rewrite
- rewrite goes through a temp file in the same directory + os.replace,
  so a crash mid-write leaves the previous file intact
"""

from __future__ import annotations

import contextlib
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List


def write_json_atomic(path: Path, obj: Any) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(obj, f, indent=2, ensure_ascii=False)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_name)
        raise


def read_json_or_none(path: Path) -> Any:
    path = Path(path)
    if not path.exists():
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except ValueError:
        return None


class JsonArrayLog:
    """Append-only log stored as a single JSON array file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> List[Any]:
        data = read_json_or_none(self.path)
        if not isinstance(data, list):
            return []
        return data

    def append(self, entry: Dict[str, Any]) -> int:
        """Append one entry and return the new length of the log."""
        rows = self.load()
        rows.append(entry)
        write_json_atomic(self.path, rows)
        return len(rows)
