"""
Utilities package for the Courtside substitution tracker.

This package contains utility functions used throughout the application.
"""
from .time_utils import Clock, fmt_mmss, now_ts
from .logging_utils import configure_logging
from .constants import (
    APP_TITLE, DEFAULT_HOST, DEFAULT_PORT, DEFAULT_DATA_FILE, DEFAULT_LOG_LEVEL,
    MIN_JERSEY_NUMBER, MAX_JERSEY_NUMBER, MAX_NAME_LENGTH, GAME_STATE_LABELS
)

__all__ = [
    "Clock", "fmt_mmss", "now_ts", "configure_logging", "APP_TITLE",
    "DEFAULT_HOST", "DEFAULT_PORT", "DEFAULT_DATA_FILE", "DEFAULT_LOG_LEVEL",
    "MIN_JERSEY_NUMBER", "MAX_JERSEY_NUMBER", "MAX_NAME_LENGTH", "GAME_STATE_LABELS"
]
