"""
Services package for the Courtside substitution tracker.

This package contains the game state engine and the services around it.
Includes factory for dependency injection.
"""
from .persistence_service import Repository, InMemoryRepository, JsonFileRepository
from .ledger import SubstitutionLedger
from .locks import GameLocks
from .period_service import PeriodService
from .stats_service import StatsService
from .game_service import GameService
from .player_service import PlayerService, PlayerValidator
from .report_service import ReportService, GameReportExporter
from .service_factory import ServiceFactory

__all__ = [
    "Repository", "InMemoryRepository", "JsonFileRepository",
    "SubstitutionLedger", "GameLocks", "PeriodService", "StatsService",
    "GameService", "PlayerService", "PlayerValidator",
    "ReportService", "GameReportExporter", "ServiceFactory"
]
