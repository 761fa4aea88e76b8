"""Small helpers shared across the engine."""

import time


def get_time_ms() -> int:
    """Return the current wall-clock time in whole milliseconds."""
    return time.time_ns() // 1_000_000