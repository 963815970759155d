"""Period controller: start/stop periods and gate substitutions."""

import logging
from typing import List, Optional

from ..errors import GameNotStarted, PeriodAlreadyRunning, PeriodNotRunning
from ..models import Game, Period, PeriodStatus, Substitution
from .ledger import SubstitutionLedger

logger = logging.getLogger(__name__)


class PeriodService:
    """
    Drive the NOT_STARTED -> RUNNING -> STOPPED lifecycle of a game's periods.

    A stopped period never restarts; the coach starts a new one instead.
    Methods mutate the Game passed in and leave persistence to the caller.
    """

    def __init__(self, ledger: Optional[SubstitutionLedger] = None):
        self.ledger = ledger or SubstitutionLedger()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start_period(self, game: Game, timestamp: float) -> Period:
        """
        Append and start the next period.

        Raises:
            GameNotStarted: If the game is not started or has already ended
            PeriodAlreadyRunning: If another period of the game is running
        """
        if not game.started or game.ended:
            raise GameNotStarted(game.id)

        running = game.running_period()
        if running is not None:
            raise PeriodAlreadyRunning(game.id, running.index)

        period = Period(
            game_id=game.id,
            index=len(game.periods) + 1,
            status=PeriodStatus.RUNNING,
            start_ts=timestamp,
        )
        game.periods.append(period)
        logger.info("Game %s: period %s started", game.id, period.index)
        return period

    def stop_period(
        self, game: Game, timestamp: float, period_index: Optional[int] = None
    ) -> List[Substitution]:
        """
        Stop a running period, force-closing every open interval in it.

        Args:
            period_index: Period to stop; defaults to the running one

        Returns:
            The intervals that were force-closed

        Raises:
            PeriodNotRunning: If the targeted period is not running
        """
        period = self.require_running(game, period_index)
        closed = self.ledger.close_all_open(period, timestamp)
        period.status = PeriodStatus.STOPPED
        period.end_ts = timestamp
        logger.info(
            "Game %s: period %s stopped, %d player(s) subbed off",
            game.id, period.index, len(closed),
        )
        return closed

    # ------------------------------------------------------------------
    # Substitutions
    # ------------------------------------------------------------------
    def sub_on(
        self, game: Game, player_id: int, timestamp: float, period_index: Optional[int] = None
    ) -> Substitution:
        period = self.require_running(game, period_index)
        interval = self.ledger.sub_on(period, player_id, timestamp)
        logger.debug("Game %s: player %s on in period %s", game.id, player_id, period.index)
        return interval

    def sub_off(
        self, game: Game, player_id: int, timestamp: float, period_index: Optional[int] = None
    ) -> Substitution:
        period = self.require_running(game, period_index)
        interval = self.ledger.sub_off(period, player_id, timestamp)
        logger.debug("Game %s: player %s off in period %s", game.id, player_id, period.index)
        return interval

    @staticmethod
    def require_running(game: Game, period_index: Optional[int] = None) -> Period:
        """
        Resolve the targeted period and check that it is running.

        Raises:
            PeriodNotRunning: If there is no such period or it is not running
        """
        if period_index is None:
            period = game.running_period()
        else:
            period = game.get_period(period_index)
        if period is None or not period.running:
            raise PeriodNotRunning(game.id, period_index)
        return period
