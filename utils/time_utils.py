"""
utils/time_utils.py

Purpose: Timestamp helpers

- Epoch-millisecond timestamps used for updated_at
"""

import time


def now_ms() -> int:
    """
    Returns the current time as epoch milliseconds.
    """
    return int(time.time() * 1000)
