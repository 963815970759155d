"""Substitution ledger: on/off interval bookkeeping within a period."""

import logging
from typing import Dict, List, Optional, Set

from ..errors import AlreadyOn, NotOn
from ..models import Game, Period, PlayerTotals, Substitution

logger = logging.getLogger(__name__)


class SubstitutionLedger:
    """
    Track on/off intervals per player within one period.

    The ledger mutates the Period it is given and leaves persistence to the
    caller. It does not check whether the period is running; the period
    controller enforces that before delegating.
    """

    def sub_on(self, period: Period, player_id: int, timestamp: float) -> Substitution:
        """
        Open a new interval for the player.

        Raises:
            AlreadyOn: If the player already has an open interval in the period
        """
        if self._open_interval(period, player_id) is not None:
            raise AlreadyOn(player_id, period.id)

        interval = Substitution(
            id=len(period.substitutions) + 1,
            period_id=period.id,
            player_id=player_id,
            on_ts=timestamp,
        )
        period.substitutions.append(interval)
        return interval

    def sub_off(self, period: Period, player_id: int, timestamp: float) -> Substitution:
        """
        Close the player's most recent open interval.

        Raises:
            NotOn: If the player has no open interval in the period
        """
        interval = self._open_interval(period, player_id)
        if interval is None:
            raise NotOn(player_id, period.id)

        interval.off_ts = max(timestamp, interval.on_ts)
        return interval

    def elapsed_for(self, period: Period, player_id: int, as_of: float) -> float:
        """Closed durations plus the live duration of any open interval."""
        return sum(
            s.duration(as_of) for s in period.substitutions if s.player_id == player_id
        )

    def appearances_for(self, period: Period, player_id: int) -> int:
        """One appearance per completed on/off cycle."""
        return sum(
            1 for s in period.substitutions if s.player_id == player_id and not s.is_open
        )

    def close_all_open(self, period: Period, timestamp: float) -> List[Substitution]:
        """
        Force-close every open interval in the period.

        Returns:
            The intervals that were closed; empty when none were open
        """
        closed = []
        for interval in period.substitutions:
            if interval.is_open:
                interval.off_ts = max(timestamp, interval.on_ts)
                closed.append(interval)
        if closed:
            logger.debug("Closed %d open interval(s) in period %s", len(closed), period.id)
        return closed

    def on_court(self, period: Period) -> Set[int]:
        """Ids of players with an open interval in the period."""
        return {s.player_id for s in period.substitutions if s.is_open}

    def totals(self, period: Period, as_of: Optional[float] = None) -> Dict[int, PlayerTotals]:
        """
        Per-player playing time and appearances for the period.

        Args:
            as_of: Include live time of open intervals up to this timestamp
        """
        result: Dict[int, PlayerTotals] = {}
        for interval in period.substitutions:
            totals = result.setdefault(interval.player_id, PlayerTotals())
            totals.seconds += interval.duration(as_of)
            if not interval.is_open:
                totals.appearances += 1
        return result

    def game_totals(self, game: Game, as_of: Optional[float] = None) -> Dict[int, PlayerTotals]:
        """Per-player totals summed over every period of the game."""
        result: Dict[int, PlayerTotals] = {}
        for period in game.periods:
            for player_id, totals in self.totals(period, as_of).items():
                merged = result.setdefault(player_id, PlayerTotals())
                merged.seconds += totals.seconds
                merged.appearances += totals.appearances
        return result

    @staticmethod
    def _open_interval(period: Period, player_id: int) -> Optional[Substitution]:
        for interval in reversed(period.substitutions):
            if interval.player_id == player_id and interval.is_open:
                return interval
        return None
