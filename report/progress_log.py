#!/usr/bin/env python3
"""
Markdown progress log

One table row per completed run:
  | YYYY-MM-DD | <status> | <commits> | <summary> |

The file is never parsed. The duplicate-run guard is a plain substring
search for `| <today> |`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

STATUS_OK = "✅ Operational"
STATUS_PARTIAL = "⚠️ Partial Data"
SUMMARY_CRYPTO_CHARS = 20


def read_log_text(path: Path) -> str:
    if not path.exists():
        return ""
    return path.read_text(encoding="utf-8")


def date_token(day: str) -> str:
    return f"| {day} |"


def already_ran(path: Path, day: str) -> bool:
    return date_token(day) in read_log_text(path)


def compact_json(obj: Any) -> str:
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False)


def format_row(day: str, all_fetched: bool, commit_count: int, crypto: Any, accuracy: str) -> str:
    """`crypto` is the raw payload, or None when the fetch failed."""
    status = STATUS_OK if all_fetched else STATUS_PARTIAL
    summary = (
        f"Auto-update. Crypto: {compact_json(crypto)[:SUMMARY_CRYPTO_CHARS]}... "
        f"Exp Acc: {accuracy}"
    )
    return f"| {day} | {status} | {commit_count} | {summary} |\n"


def append_row(path: Path, row: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as f:
        f.write(row)
