# PATH: core/time.py
"""
Time helpers for query latency.
"""

import time


def now_ms() -> int:
    """Current Unix timestamp in milliseconds."""
    return int(time.time() * 1000)


def elapsed_ms(start_ms: int) -> int:
    """Milliseconds elapsed since start_ms."""
    return now_ms() - start_ms
