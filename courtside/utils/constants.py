"""
Constants for the Courtside substitution tracker.

This module contains configuration defaults used throughout the application.
"""

# Application metadata
APP_TITLE = "Courtside"

# Web server defaults
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 7122

# Persistence defaults (empty path keeps everything in memory)
DEFAULT_DATA_FILE = ""

# Logging defaults
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Roster limits
MIN_JERSEY_NUMBER = 0
MAX_JERSEY_NUMBER = 99
MAX_NAME_LENGTH = 100

# Labels reported for each game lifecycle phase
GAME_STATE_LABELS = {
    "not_started": "Not Started",
    "in_progress": "In Progress",
    "paused": "Between Periods",
    "finished": "Finished",
}
