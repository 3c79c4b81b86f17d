#!/usr/bin/env python3
"""
Daily Engine configuration (v1)

- Built-in defaults for endpoints, timeouts and artifact paths
- Optional overrides from daily_engine.yaml in the installation root
- One EngineConfig is built at process start and handed to every step
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_FILENAME = "daily_engine.yaml"

DEFAULT_WEATHER_URL = (
    "https://api.open-meteo.com/v1/forecast"
    "?latitude=37.7749&longitude=-122.4194&current_weather=true"
)
DEFAULT_CRYPTO_URL = (
    "https://api.coingecko.com/api/v3/simple/price"
    "?ids=bitcoin,ethereum&vs_currencies=usd"
)

DEFAULT_PATHS = {
    "progress_log": "progress-log.md",
    "readme": "README.md",
    "streak": "streak.json",
    "daily_data": "data/daily-data.json",
    "metrics": "experiments/metrics.json",
}


@dataclass
class EngineConfig:
    root: Path
    weather_url: str = DEFAULT_WEATHER_URL
    crypto_url: str = DEFAULT_CRYPTO_URL
    http_timeout_sec: float = 20.0
    git_timeout_sec: float = 30.0
    user_agent: str = "Daily-Engine/0.1"
    paths: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_PATHS))

    def path(self, name: str) -> Path:
        p = Path(self.paths[name])
        return p if p.is_absolute() else self.root / p

    @property
    def progress_log(self) -> Path:
        return self.path("progress_log")

    @property
    def readme(self) -> Path:
        return self.path("readme")

    @property
    def streak_file(self) -> Path:
        return self.path("streak")

    @property
    def daily_data_file(self) -> Path:
        return self.path("daily_data")

    @property
    def metrics_file(self) -> Path:
        return self.path("metrics")

    def ensure_dirs(self) -> None:
        """Create the data and experiments directories if absent."""
        for p in (self.daily_data_file, self.metrics_file):
            p.parent.mkdir(parents=True, exist_ok=True)


def load_config(root: Path, config_path: Optional[Path] = None) -> EngineConfig:
    """
    Build an EngineConfig for `root`.

    Reads `config_path` (default: <root>/daily_engine.yaml) when present:

      defaults:
        http_timeout_sec: 20
        git_timeout_sec: 30
        user_agent: "Daily-Engine/0.1"
      endpoints:
        weather: https://...
        crypto: https://...
      paths:
        daily_data: data/daily-data.json
    """
    root = Path(root)
    cfg = EngineConfig(root=root)

    path = Path(config_path) if config_path is not None else root / CONFIG_FILENAME
    if not path.exists():
        return cfg

    with path.open("r", encoding="utf-8") as f:
        raw: Dict[str, Any] = yaml.safe_load(f) or {}

    defaults = raw.get("defaults", {}) or {}
    endpoints = raw.get("endpoints", {}) or {}
    paths = raw.get("paths", {}) or {}

    cfg.http_timeout_sec = float(defaults.get("http_timeout_sec", cfg.http_timeout_sec))
    cfg.git_timeout_sec = float(defaults.get("git_timeout_sec", cfg.git_timeout_sec))
    cfg.user_agent = str(defaults.get("user_agent", cfg.user_agent))

    cfg.weather_url = str(endpoints.get("weather", cfg.weather_url))
    cfg.crypto_url = str(endpoints.get("crypto", cfg.crypto_url))

    for key, value in paths.items():
        if key in DEFAULT_PATHS and value:
            cfg.paths[key] = str(value)

    return cfg
