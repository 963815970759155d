"""
Time utilities for the Courtside substitution tracker.

This module contains the clock collaborator and duration formatting helpers
used throughout the application.
"""
import time


def fmt_mmss(seconds: float) -> str:
    """
    Format seconds as MM:SS string.

    Args:
        seconds: Number of seconds to format (fractions are truncated)

    Returns:
        Formatted time string in MM:SS format

    Example:
        >>> fmt_mmss(90)
        '01:30'
        >>> fmt_mmss(3661)
        '61:01'
    """
    seconds = max(0, int(seconds))
    m = seconds // 60
    s = seconds % 60
    return f"{m:02d}:{s:02d}"


def now_ts() -> float:
    """
    Get current timestamp in epoch seconds.

    Returns:
        Current time as floating point epoch seconds
    """
    return time.time()


class Clock:
    """
    Source of timestamps for every state transition.

    Operations never accept timestamps from callers; they ask the clock, so
    client clock skew cannot leak into recorded intervals.
    """

    def now(self) -> float:
        return now_ts()
