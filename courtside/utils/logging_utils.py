"""Logging setup for the Courtside substitution tracker."""
import logging
import sys

from .constants import DEFAULT_LOG_LEVEL, LOG_DATE_FORMAT, LOG_FORMAT


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """
    Configure console logging for the whole application.

    Args:
        level: Level name such as "DEBUG" or "INFO"; unknown names fall back to INFO
    """
    log_level = getattr(logging, str(level).upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Werkzeug request lines are noisy at INFO
    logging.getLogger("werkzeug").setLevel(max(log_level, logging.WARNING))

    logging.getLogger(__name__).info("Logging configured (level=%s)", logging.getLevelName(log_level))
