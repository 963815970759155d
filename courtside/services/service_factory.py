"""
Service Factory for dependency injection.

This module provides a factory for creating properly configured service
instances that share one repository, clock, ledger and lock registry.
"""
import logging
from typing import Optional

from ..config import Config
from ..utils import Clock
from .game_service import GameService
from .ledger import SubstitutionLedger
from .locks import GameLocks
from .period_service import PeriodService
from .persistence_service import InMemoryRepository, JsonFileRepository, Repository
from .player_service import PlayerService
from .report_service import GameReportExporter, ReportService
from .stats_service import StatsService

logger = logging.getLogger(__name__)


class ServiceFactory:
    """
    Factory for creating service instances with shared collaborators.

    Collaborators are created lazily and cached, so every service built by one
    factory sees the same store and the same per-game locks.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        repository: Optional[Repository] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize factory.

        Args:
            config: Settings used to pick the store; defaults to the environment
            repository: Pre-built store, overriding the configured one
            clock: Timestamp source; defaults to wall-clock time
        """
        self.config = config or Config.from_env()
        self._repository = repository
        self._clock = clock
        self._ledger: Optional[SubstitutionLedger] = None
        self._locks: Optional[GameLocks] = None
        self._game_service: Optional[GameService] = None

    def create_game_service(self) -> GameService:
        if self._game_service is None:
            repository = self.get_repository()
            ledger = self._get_ledger()
            self._game_service = GameService(
                repository=repository,
                clock=self.get_clock(),
                period_service=PeriodService(ledger),
                stats_service=StatsService(repository, ledger),
                locks=self._get_locks(),
            )
        return self._game_service

    def create_player_service(self) -> PlayerService:
        return PlayerService(self.get_repository())

    def create_report_service(self) -> ReportService:
        return ReportService(
            repository=self.get_repository(),
            clock=self.get_clock(),
            ledger=self._get_ledger(),
            export_service=GameReportExporter(),
        )

    def create_complete_service_suite(self, recover: bool = True) -> dict:
        """
        Create a complete suite of services with proper dependencies.

        Args:
            recover: Finalize games left ended-but-unfinalized by a previous run

        Returns:
            Dictionary containing all configured services
        """
        game_service = self.create_game_service()
        if recover:
            recovered = game_service.recover()
            if recovered:
                logger.warning("Recovered statistics for game(s): %s", recovered)

        return {
            'games': game_service,
            'players': self.create_player_service(),
            'reports': self.create_report_service(),
        }

    def get_repository(self) -> Repository:
        """Get singleton repository chosen by configuration."""
        if self._repository is None:
            if self.config.uses_memory_store:
                logger.info("Using in-memory store")
                self._repository = InMemoryRepository()
            else:
                logger.info("Using JSON store at %s", self.config.data_file)
                self._repository = JsonFileRepository(self.config.data_file)
        return self._repository

    def get_clock(self) -> Clock:
        if self._clock is None:
            self._clock = Clock()
        return self._clock

    def _get_ledger(self) -> SubstitutionLedger:
        if self._ledger is None:
            self._ledger = SubstitutionLedger()
        return self._ledger

    def _get_locks(self) -> GameLocks:
        if self._locks is None:
            self._locks = GameLocks()
        return self._locks
