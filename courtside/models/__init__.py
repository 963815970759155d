"""
Models package for the Courtside substitution tracker.

This package contains the core data models used throughout the application.
"""
from .player import Player, PlayerStats
from .game import Game, Period, PeriodStatus, Substitution
from .game_report import GameReport, PeriodSummary, PlayerTimeSummary, PlayerTotals

__all__ = [
    "Player", "PlayerStats", "Game", "Period", "PeriodStatus", "Substitution",
    "GameReport", "PeriodSummary", "PlayerTimeSummary", "PlayerTotals"
]
