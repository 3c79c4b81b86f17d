#!/usr/bin/env python3
"""
Daily Engine runner

Runs a single daily cycle:
- guard (skip if today's row is already in the progress log)
- git commit count
- weather + crypto snapshots
- daily data log, synthetic experiment log
- streak, README markers, progress log row

Designed to be executed once a day by cron / a CI schedule.
"""

import sys
import json
import logging
import random
import time
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

import requests

from analyze.experiment import make_experiment_entry
from ingest.fetcher import UNAVAILABLE, fetch_json, make_session
from ingest.git_stats import CommitCounter, GitCommitCounter, count_commits_or_zero
from report.progress_log import already_ran, append_row, format_row
from report.readme_markers import update_readme
from storage.json_log import JsonArrayLog
from storage.streak import load_streak, next_streak, save_streak
from utils.config import EngineConfig, load_config

log = logging.getLogger("daily-engine")

REPO_ROOT = Path(__file__).resolve().parent


@dataclass
class RunOutcome:
    date: str
    skipped: bool
    status: Optional[str] = None
    streak: Optional[int] = None
    commit_count: Optional[int] = None
    daily_entries: Optional[int] = None
    experiment_entries: Optional[int] = None


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def run_daily(
    cfg: EngineConfig,
    *,
    commit_counter: Optional[CommitCounter] = None,
    session: Optional[requests.Session] = None,
    now: Optional[Callable[[], datetime]] = None,
    rng: Optional[random.Random] = None,
) -> RunOutcome:
    """Run one cycle against `cfg`. Collaborators default to the real ones."""
    now = now or _utc_now
    started = now()
    today = started.date().isoformat()
    run_timestamp = started.isoformat(timespec="seconds")
    log.info(f"Starting Daily Engine for {today}")

    if already_ran(cfg.progress_log, today):
        log.info("Update for today already exists. Exiting.")
        return RunOutcome(date=today, skipped=True)

    cfg.ensure_dirs()

    if commit_counter is None:
        commit_counter = GitCommitCounter(cfg.root, timeout_sec=cfg.git_timeout_sec)
    step_start = time.time()
    commit_count = count_commits_or_zero(commit_counter)
    log.info(f"Commit count: {commit_count} (took {time.time() - step_start:.2f}s)")

    if session is None:
        session = make_session(cfg.user_agent)
    step_start = time.time()
    weather = fetch_json(session, cfg.weather_url, cfg.http_timeout_sec)
    crypto = fetch_json(session, cfg.crypto_url, cfg.http_timeout_sec)
    log.info(
        f"Fetched snapshots weather_ok={weather.ok} crypto_ok={crypto.ok} "
        f"(took {time.time() - step_start:.2f}s)"
    )

    current_weather = None
    if weather.ok and isinstance(weather.payload, dict):
        current_weather = weather.payload.get("current_weather")
    daily_entry = {
        "date": today,
        "timestamp": run_timestamp,
        "weather": current_weather or UNAVAILABLE,
        "crypto": crypto.or_sentinel(),
    }
    daily_entries = JsonArrayLog(cfg.daily_data_file).append(daily_entry)

    experiment = make_experiment_entry(today, rng=rng)
    experiment_entries = JsonArrayLog(cfg.metrics_file).append(experiment)
    log.info(f"Logged experiment {experiment['experiment_id']} accuracy={experiment['accuracy']}")

    state = next_streak(
        load_streak(cfg.streak_file),
        run_date=started.date(),
        commit_count=commit_count,
        run_timestamp=run_timestamp,
    )
    save_streak(cfg.streak_file, state)
    log.info(f"Streak: {state.current_streak}")

    update_readme(cfg.readme, today, state.current_streak, commit_count)

    all_fetched = weather.ok and crypto.ok
    row = format_row(
        today,
        all_fetched=all_fetched,
        commit_count=commit_count,
        crypto=crypto.payload if crypto.ok else None,
        accuracy=experiment["accuracy"],
    )
    append_row(cfg.progress_log, row)

    return RunOutcome(
        date=today,
        skipped=False,
        status="operational" if all_fetched else "partial",
        streak=state.current_streak,
        commit_count=commit_count,
        daily_entries=daily_entries,
        experiment_entries=experiment_entries,
    )


def main():
    """Entry point: configure logging, run once, map errors to exit code."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    run_start = time.time()

    try:
        cfg = load_config(REPO_ROOT)
        outcome = run_daily(cfg)

        total_elapsed = time.time() - run_start
        print(json.dumps({"event": "run_done", **asdict(outcome)}, ensure_ascii=False))
        log.info(f"Daily Engine finished successfully (total: {total_elapsed:.2f}s)")
        return 0

    except Exception as e:
        total_elapsed = time.time() - run_start
        log.exception(f"Daily Engine run failed after {total_elapsed:.2f}s: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
