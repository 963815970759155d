"""
Game controller for the Courtside substitution tracker.

This module owns the Created -> Started -> Ended lifecycle of a game and is
the entry point the serving layer calls for every state transition. Each
mutating operation loads the game, applies the change to that private copy
under the game's lock, and saves it with a single store write.
"""
import logging
from threading import Lock
from typing import List, Optional

from ..errors import AlreadyEnded, AlreadyStarted, NotStarted
from ..models import Game
from ..utils import Clock
from .ledger import SubstitutionLedger
from .locks import GameLocks
from .period_service import PeriodService
from .persistence_service import Repository
from .stats_service import StatsService

logger = logging.getLogger(__name__)


class GameService:
    """
    Service for driving games, periods and substitutions.

    Timestamps always come from the injected clock, never from callers.
    """

    def __init__(
        self,
        repository: Repository,
        clock: Optional[Clock] = None,
        period_service: Optional[PeriodService] = None,
        stats_service: Optional[StatsService] = None,
        locks: Optional[GameLocks] = None,
    ):
        self.repository = repository
        self.clock = clock or Clock()
        self.period_service = period_service or PeriodService()
        self.ledger: SubstitutionLedger = self.period_service.ledger
        self.stats_service = stats_service or StatsService(repository, self.ledger)
        self.locks = locks or GameLocks()
        self._create_lock = Lock()

    # ------------------------------------------------------------------
    # Game lifecycle
    # ------------------------------------------------------------------
    def create_game(self) -> Game:
        """Create the next sequentially numbered game, not yet started."""
        with self._create_lock:
            game = Game(id=self.repository.count_games() + 1, created_ts=self.clock.now())
            self.repository.create_game(game)
        logger.info("Game %s created", game.id)
        return game

    def start_game(self, game_id: int) -> Game:
        """
        Mark a game as started. No period is started automatically.

        Raises:
            AlreadyStarted: If the game was started before (including ended games)
        """
        with self.locks.hold(game_id):
            game = self.repository.load_game(game_id)
            if game.started:
                raise AlreadyStarted(game_id)
            game.started = True
            game.start_ts = self.clock.now()
            self.repository.save_game(game)
        logger.info("Game %s started", game_id)
        return game

    def end_game(self, game_id: int) -> Game:
        """
        End a game, close everything still open and fold its statistics in.

        The running period, if any, is stopped at the end timestamp, which
        force-closes all open intervals. The ended game is saved before the
        aggregator runs, so a crash in between leaves a game that
        :meth:`recover` can finish.

        Raises:
            AlreadyEnded: If the game has already ended
            NotStarted: If the game was never started
        """
        with self.locks.hold(game_id):
            game = self.repository.load_game(game_id)
            if game.ended:
                raise AlreadyEnded(game_id)
            if not game.started:
                raise NotStarted(game_id)

            timestamp = self.clock.now()
            # Stopped periods have no open intervals; at most one period runs
            running = game.running_period()
            if running is not None:
                self.period_service.stop_period(game, timestamp, running.index)

            game.ended = True
            game.end_ts = timestamp
            self.repository.save_game(game)
            logger.info("Game %s ended", game_id)

            self.stats_service.finalize(game_id, self.ledger.game_totals(game))
            return self.repository.load_game(game_id)

    def set_mvp(self, game_id: int, player_id: int) -> Game:
        """
        Set or replace the game's MVP. Allowed in every game state.

        Raises:
            PlayerNotFound: If the player is not on the roster
        """
        self.repository.load_player(player_id)
        with self.locks.hold(game_id):
            game = self.repository.load_game(game_id)
            game.mvp_player_id = player_id
            self.repository.save_game(game)
        logger.info("Game %s: MVP set to player %s", game_id, player_id)
        return game

    # ------------------------------------------------------------------
    # Periods and substitutions
    # ------------------------------------------------------------------
    def start_period(self, game_id: int) -> Game:
        with self.locks.hold(game_id):
            game = self.repository.load_game(game_id)
            self.period_service.start_period(game, self.clock.now())
            self.repository.save_game(game)
        return game

    def stop_period(self, game_id: int, period_index: Optional[int] = None) -> Game:
        with self.locks.hold(game_id):
            game = self.repository.load_game(game_id)
            self.period_service.stop_period(game, self.clock.now(), period_index)
            self.repository.save_game(game)
        return game

    def sub_on(self, game_id: int, player_id: int, period_index: Optional[int] = None) -> Game:
        """
        Put a player on court in the running (or given) period.

        Raises:
            PlayerNotFound: If the player is not on the roster
            PeriodNotRunning: If the period is not running
            AlreadyOn: If the player is already on court
        """
        self.repository.load_player(player_id)
        with self.locks.hold(game_id):
            game = self.repository.load_game(game_id)
            self.period_service.sub_on(game, player_id, self.clock.now(), period_index)
            self.repository.save_game(game)
        return game

    def sub_off(self, game_id: int, player_id: int, period_index: Optional[int] = None) -> Game:
        """
        Take a player off court in the running (or given) period.

        Raises:
            PlayerNotFound: If the player is not on the roster
            PeriodNotRunning: If the period is not running
            NotOn: If the player is not on court
        """
        self.repository.load_player(player_id)
        with self.locks.hold(game_id):
            game = self.repository.load_game(game_id)
            self.period_service.sub_off(game, player_id, self.clock.now(), period_index)
            self.repository.save_game(game)
        return game

    # ------------------------------------------------------------------
    # Read accessors (no lock; stores return copies)
    # ------------------------------------------------------------------
    def get_game(self, game_id: int) -> Game:
        return self.repository.load_game(game_id)

    def list_games(self) -> List[Game]:
        return self.repository.list_games()

    def elapsed_for(self, game_id: int, player_id: int) -> float:
        """Live playing seconds for a player across the whole game."""
        game = self.repository.load_game(game_id)
        now = self.clock.now()
        return sum(self.ledger.elapsed_for(period, player_id, now) for period in game.periods)

    # ------------------------------------------------------------------
    # Recovery
    # ------------------------------------------------------------------
    def recover(self) -> List[int]:
        """
        Finalize statistics for games that ended before a crash cut them short.

        Returns:
            Ids of the games finalized by this pass
        """
        recovered = []
        for game in self.repository.list_games():
            if not game.ended or game.finalized:
                continue
            with self.locks.hold(game.id):
                logger.warning("Game %s ended without finalized statistics, recovering", game.id)
                if self.stats_service.finalize_game(game.id):
                    recovered.append(game.id)
        return recovered
