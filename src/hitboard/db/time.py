# src/hitboard/db/time.py
"""Time utilities for counter timestamps."""

import time


def epoch_millis() -> int:
    """Return the current wall-clock time as integer epoch milliseconds."""
    return time.time_ns() // 1_000_000
