"""
Courtside

Live substitution and playing-time tracking for team sport matches.

A coach records when a game and its periods start and stop and when players
are subbed on and off; the package derives per-player playing time and
appearances and folds each finished game into career statistics exactly once.
"""
from .config import Config
from .models import Player, Game, Period, PeriodStatus, Substitution
from .services import GameService, PlayerService, ReportService, ServiceFactory
from .ui import create_app, run_web_app
from .utils import fmt_mmss, now_ts, APP_TITLE

__version__ = "1.0.0"

__all__ = [
    "Config", "Player", "Game", "Period", "PeriodStatus", "Substitution",
    "GameService", "PlayerService", "ReportService", "ServiceFactory",
    "create_app", "run_web_app", "fmt_mmss", "now_ts", "APP_TITLE"
]
