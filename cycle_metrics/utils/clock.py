"""Wall-clock helpers."""

import time


def now_millis() -> int:
    """Return the current time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000
