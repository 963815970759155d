"""Dataclasses representing read-only game reports for the tracker."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class PlayerTotals:
    """Playing time and appearance count for one player in one game."""

    seconds: float = 0.0
    appearances: int = 0

    @property
    def participated(self) -> bool:
        return self.seconds > 0 or self.appearances > 0


@dataclass
class PlayerTimeSummary:
    """Live playing time information for a single roster player."""

    player_id: int
    name: str
    number: int
    on_court: bool
    appearances: int
    total_seconds: float
    is_mvp: bool = False


@dataclass
class PeriodSummary:
    """Timing information for a single period."""

    index: int
    status: str
    start_ts: Optional[float]
    end_ts: Optional[float]
    elapsed_seconds: float


@dataclass
class GameReport:
    """Snapshot of a game's state and playing time distribution."""

    generated_ts: float
    game_id: int
    state: str
    start_ts: Optional[float]
    end_ts: Optional[float]
    elapsed_seconds: float
    current_period: Optional[int]
    current_period_seconds: float
    mvp_player_id: Optional[int]
    finalized: bool
    periods: List[PeriodSummary] = field(default_factory=list)
    players: List[PlayerTimeSummary] = field(default_factory=list)
