"""Jittered exponential backoff between request attempts."""

from __future__ import annotations

import random
import time
from typing import Optional


BASE_DELAY_MS = 1000.0
BACKOFF_MULTIPLIER = 1.6
MAX_DELAY_MS = 60000.0
JITTER_MIN = 0.77
JITTER_MAX = 1.23


def base_delay_ms(attempt: int) -> float:
    return min(BASE_DELAY_MS * BACKOFF_MULTIPLIER**attempt, MAX_DELAY_MS)


def jitter_factor() -> float:
    return random.uniform(JITTER_MIN, JITTER_MAX)


def compute_delay(attempt: int, attempt_start: float, now: Optional[float] = None) -> float:
    """Seconds to sleep before the next attempt.

    ``attempt_start`` and ``now`` are ``time.monotonic()`` readings. Time
    already spent inside the failed attempt counts towards the target delay,
    so a slow 429 is not followed by the full backoff on top.
    """
    if now is None:
        now = time.monotonic()
    elapsed_ms = (now - attempt_start) * 1000
    delay_ms = base_delay_ms(attempt) * jitter_factor() - elapsed_ms
    return max(delay_ms, 0.0) / 1000
