#!/usr/bin/env python3
"""
Daily Engine streak state

streak.json holds a single object:
  {"currentStreak": int, "totalCommits": int, "lastUpdated": ISO-8601}

Continuity rule: the streak grows only when the calendar date (UTC) of
lastUpdated is exactly the day before the run date. Anything else,
including a second run on the same day, restarts it at 1.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from dateutil import parser as dtparser

from storage.json_log import read_json_or_none, write_json_atomic

EPOCH_ISO = datetime(1970, 1, 1, tzinfo=timezone.utc).isoformat(timespec="seconds")
KNOWN_KEYS = ("currentStreak", "totalCommits", "lastUpdated")


@dataclass
class StreakState:
    current_streak: int = 0
    total_commits: int = 0
    last_updated: str = EPOCH_ISO
    # keys other than the three above, written back unchanged
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "StreakState":
        return cls(
            current_streak=int(d.get("currentStreak", 0) or 0),
            total_commits=int(d.get("totalCommits", 0) or 0),
            last_updated=str(d.get("lastUpdated") or EPOCH_ISO),
            extra={k: v for k, v in d.items() if k not in KNOWN_KEYS},
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.extra,
            "currentStreak": self.current_streak,
            "totalCommits": self.total_commits,
            "lastUpdated": self.last_updated,
        }


def parse_utc_date(s: Optional[str]) -> Optional[date]:
    if not s:
        return None
    try:
        dt = dtparser.parse(s)
    except (ValueError, OverflowError):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).date()


def load_streak(path: Path) -> StreakState:
    data = read_json_or_none(path)
    if not isinstance(data, dict):
        return StreakState()
    try:
        return StreakState.from_dict(data)
    except (TypeError, ValueError):
        return StreakState()


def next_streak(prev: StreakState, run_date: date, commit_count: int, run_timestamp: str) -> StreakState:
    yesterday = run_date - timedelta(days=1)
    last = parse_utc_date(prev.last_updated)

    if last is not None and last.isoformat() == yesterday.isoformat():
        streak = prev.current_streak + 1
    else:
        streak = 1

    return StreakState(
        current_streak=streak,
        total_commits=commit_count,
        last_updated=run_timestamp,
        extra=dict(prev.extra),
    )


def save_streak(path: Path, state: StreakState) -> None:
    write_json_atomic(path, state.to_dict())
