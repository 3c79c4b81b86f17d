#!/usr/bin/env python3
"""
Daily Engine snapshot fetcher

- One GET per endpoint, JSON body expected
- Any failure becomes a FetchResult.failure with a reason; nothing is raised
- No retries
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests

log = logging.getLogger(__name__)

UNAVAILABLE = "Unavailable"


@dataclass(frozen=True)
class FetchResult:
    url: str
    ok: bool
    payload: Any = None
    error: Optional[str] = None

    @classmethod
    def success(cls, url: str, payload: Any) -> "FetchResult":
        return cls(url=url, ok=True, payload=payload)

    @classmethod
    def failure(cls, url: str, error: str) -> "FetchResult":
        return cls(url=url, ok=False, error=error)

    def or_sentinel(self) -> Any:
        return self.payload if self.ok else UNAVAILABLE


def make_session(user_agent: str) -> requests.Session:
    session = requests.Session()
    session.headers.update({"User-Agent": user_agent, "Accept": "application/json"})
    return session


def fetch_json(session: requests.Session, url: str, timeout_sec: float) -> FetchResult:
    try:
        resp = session.get(url, timeout=timeout_sec)
        resp.raise_for_status()
        payload = resp.json()
    except requests.RequestException as e:
        log.warning(f"Failed to fetch {url}: {e}")
        return FetchResult.failure(url, repr(e))
    except ValueError as e:
        # body was not JSON
        log.warning(f"Failed to parse response from {url}: {e}")
        return FetchResult.failure(url, repr(e))

    if payload is None:
        log.warning(f"Empty JSON body from {url}")
        return FetchResult.failure(url, "empty body")

    return FetchResult.success(url, payload)
