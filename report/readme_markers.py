#!/usr/bin/env python3
"""
README marker rewriter

Each marker is an HTML comment; the marker and everything after it on the
same line are replaced with `<marker> **<value>**`. Every occurrence is
rewritten. The rest of the document is left untouched.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict

log = logging.getLogger(__name__)

LAST_UPDATED = "<!-- LAST_UPDATED -->"
STREAK = "<!-- STREAK -->"
TOTAL_COMMITS = "<!-- TOTAL_COMMITS -->"


def replace_markers(text: str, values: Dict[str, object]) -> str:
    for marker, value in values.items():
        pattern = re.compile(re.escape(marker) + r"[^\r\n]*")
        replacement = f"{marker} **{value}**"
        text = pattern.sub(lambda _m: replacement, text)
    return text


def update_readme(path: Path, day: str, streak: int, commit_count: int) -> bool:
    """Rewrite the three markers in place. Returns False if the README is absent."""
    if not path.exists():
        return False

    # newline="" keeps CRLF line endings as they are on disk
    with path.open("r", encoding="utf-8", newline="") as f:
        text = f.read()
    text = replace_markers(
        text,
        {
            LAST_UPDATED: day,
            STREAK: streak,
            TOTAL_COMMITS: commit_count,
        },
    )
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(text)
    log.info(f"README markers updated: {path}")
    return True
