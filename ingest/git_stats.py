#!/usr/bin/env python3
"""
Daily Engine commit counter

Counts commits reachable from HEAD with `git rev-list --count HEAD`.
Failures raise ToolUnavailable; the runner turns that into zero.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable, Optional

log = logging.getLogger(__name__)

CommitCounter = Callable[[], int]


class ToolUnavailable(RuntimeError):
    """git is missing, the directory is not a repository, or the command failed."""


class GitCommitCounter:
    def __init__(self, repo_dir: Path, timeout_sec: float = 30.0, git_bin: str = "git"):
        self.repo_dir = Path(repo_dir)
        self.timeout_sec = timeout_sec
        self.git_bin = git_bin

    def __call__(self) -> int:
        try:
            result = subprocess.run(
                [self.git_bin, "rev-list", "--count", "HEAD"],
                cwd=str(self.repo_dir),
                capture_output=True,
                text=True,
                timeout=self.timeout_sec,
                check=True,
            )
        except OSError as e:
            raise ToolUnavailable(f"could not run {self.git_bin}: {e}") from e
        except subprocess.CalledProcessError as e:
            raise ToolUnavailable(f"git exited with {e.returncode}: {(e.stderr or '').strip()}") from e
        except subprocess.TimeoutExpired as e:
            raise ToolUnavailable(f"git timed out after {self.timeout_sec}s") from e

        out = result.stdout.strip()
        try:
            count = int(out)
        except ValueError as e:
            raise ToolUnavailable(f"unexpected git output: {out!r}") from e
        if count < 0:
            raise ToolUnavailable(f"negative commit count: {count}")
        return count


def count_commits_or_zero(counter: Optional[CommitCounter]) -> int:
    if counter is None:
        return 0
    try:
        return counter()
    except ToolUnavailable as e:
        log.warning(f"Could not get git commit count, defaulting to 0 ({e})")
        return 0
