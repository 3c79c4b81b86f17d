#!/usr/bin/env python3
"""
Synthetic experiment record.

Not tied to any real training run: id, accuracy and loss are drawn from
fixed ranges so the metrics log grows by one plausible-looking row a day.
"""

from __future__ import annotations

import random
from typing import Dict, Optional

ACCURACY_RANGE = (0.70, 0.95)
LOSS_RANGE = (0.10, 0.50)
EXPERIMENT_ID_MAX = 10000
EXPERIMENT_NOTES = "Automated daily experiment run."


def _draw(rng: random.Random, lo: float, hi: float) -> str:
    # rng.random() is in [0, 1), so the draw stays below hi
    return f"{lo + rng.random() * (hi - lo):.4f}"


def make_experiment_entry(day: str, rng: Optional[random.Random] = None) -> Dict[str, str]:
    rng = rng or random.Random()
    return {
        "date": day,
        "experiment_id": f"EXP-{rng.randrange(EXPERIMENT_ID_MAX)}",
        "accuracy": _draw(rng, *ACCURACY_RANGE),
        "loss": _draw(rng, *LOSS_RANGE),
        "notes": EXPERIMENT_NOTES,
    }
