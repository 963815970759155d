"""
Game model for the Courtside substitution tracker.

This module contains the Game aggregate and the entities it owns: Periods
and the Substitution intervals recorded inside each period. The whole
aggregate is persisted as one document.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class PeriodStatus(Enum):
    """
    Lifecycle of a single period. STOPPED is terminal.

    Periods are appended already RUNNING; NOT_STARTED is only the default
    for a Period built or loaded without a status.
    """
    NOT_STARTED = "not_started"
    RUNNING = "running"
    STOPPED = "stopped"


@dataclass
class Substitution:
    """
    One span during which a player is on court within a period.

    Attributes:
        id: Identifier unique within the owning period
        period_id: Identity of the owning period
        player_id: Player on court during the span
        on_ts: When the player was subbed on (epoch seconds)
        off_ts: When the player was subbed off, None while still on court
    """
    id: int
    period_id: str
    player_id: int
    on_ts: float
    off_ts: Optional[float] = None

    @property
    def is_open(self) -> bool:
        return self.off_ts is None

    def duration(self, as_of: Optional[float] = None) -> float:
        """
        Seconds covered by this interval.

        Args:
            as_of: Reference time for an open interval; open intervals
                   contribute nothing when omitted

        Returns:
            Closed duration, or live duration up to ``as_of``
        """
        if self.off_ts is not None:
            return max(0.0, self.off_ts - self.on_ts)
        if as_of is None:
            return 0.0
        return max(0.0, as_of - self.on_ts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "period_id": self.period_id,
            "player_id": self.player_id,
            "on_ts": self.on_ts,
            "off_ts": self.off_ts,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Substitution':
        return cls(
            id=int(data["id"]),
            period_id=data["period_id"],
            player_id=int(data["player_id"]),
            on_ts=float(data["on_ts"]),
            off_ts=data.get("off_ts"),
        )


@dataclass
class Period:
    """
    A bounded segment of a game during which substitutions are permitted.

    Attributes:
        game_id: Owning game
        index: 1-based sequence number within the game
        status: NOT_STARTED, RUNNING or STOPPED
        start_ts: When the period started running
        end_ts: When the period was stopped
        substitutions: Intervals recorded in this period, in creation order
    """
    game_id: int
    index: int
    status: PeriodStatus = PeriodStatus.NOT_STARTED
    start_ts: Optional[float] = None
    end_ts: Optional[float] = None
    substitutions: List[Substitution] = field(default_factory=list)

    @property
    def id(self) -> str:
        return f"{self.game_id}-{self.index}"

    @property
    def running(self) -> bool:
        return self.status is PeriodStatus.RUNNING

    def elapsed(self, as_of: Optional[float] = None) -> float:
        """Seconds the period has run; a running period counts up to ``as_of``."""
        if self.start_ts is None:
            return 0.0
        if self.end_ts is not None:
            return max(0.0, self.end_ts - self.start_ts)
        if as_of is None:
            return 0.0
        return max(0.0, as_of - self.start_ts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "game_id": self.game_id,
            "index": self.index,
            "status": self.status.value,
            "start_ts": self.start_ts,
            "end_ts": self.end_ts,
            "substitutions": [s.to_dict() for s in self.substitutions],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Period':
        return cls(
            game_id=int(data["game_id"]),
            index=int(data["index"]),
            status=PeriodStatus(data.get("status", PeriodStatus.NOT_STARTED.value)),
            start_ts=data.get("start_ts"),
            end_ts=data.get("end_ts"),
            substitutions=[Substitution.from_dict(s) for s in data.get("substitutions", [])],
        )


@dataclass
class Game:
    """
    Represents one match and everything recorded during it.

    Attributes:
        id: Sequential game number
        created_ts: When the coach created the game
        started: Whether the game has been started (set once)
        ended: Whether the game has been ended (set once)
        start_ts: When the game was started
        end_ts: When the game was ended
        mvp_player_id: Player designated most valuable, if any
        periods: Periods in sequence order
        finalized: Whether this game's numbers have been folded into player totals
    """
    id: int
    created_ts: float
    started: bool = False
    ended: bool = False
    start_ts: Optional[float] = None
    end_ts: Optional[float] = None
    mvp_player_id: Optional[int] = None
    periods: List[Period] = field(default_factory=list)
    finalized: bool = False

    def running_period(self) -> Optional[Period]:
        """Return the period currently running, if any."""
        for period in self.periods:
            if period.running:
                return period
        return None

    def get_period(self, index: int) -> Optional[Period]:
        for period in self.periods:
            if period.index == index:
                return period
        return None

    def current_period(self) -> Optional[Period]:
        """The running period, or the most recent one when none is running."""
        running = self.running_period()
        if running is not None:
            return running
        return self.periods[-1] if self.periods else None

    @property
    def state(self) -> str:
        """Lifecycle label: not_started, in_progress, paused or finished."""
        if self.ended:
            return "finished"
        if not self.started:
            return "not_started"
        if self.running_period() is not None:
            return "in_progress"
        return "paused"

    def elapsed(self, as_of: Optional[float] = None) -> float:
        """Wall-clock seconds since the game started (to end, once ended)."""
        if self.start_ts is None:
            return 0.0
        if self.end_ts is not None:
            return max(0.0, self.end_ts - self.start_ts)
        if as_of is None:
            return 0.0
        return max(0.0, as_of - self.start_ts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "created_ts": self.created_ts,
            "started": self.started,
            "ended": self.ended,
            "start_ts": self.start_ts,
            "end_ts": self.end_ts,
            "mvp_player_id": self.mvp_player_id,
            "periods": [p.to_dict() for p in self.periods],
            "finalized": self.finalized,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Game':
        mvp = data.get("mvp_player_id")
        return cls(
            id=int(data["id"]),
            created_ts=float(data.get("created_ts", 0.0)),
            started=bool(data.get("started", False)),
            ended=bool(data.get("ended", False)),
            start_ts=data.get("start_ts"),
            end_ts=data.get("end_ts"),
            mvp_player_id=int(mvp) if mvp is not None else None,
            periods=[Period.from_dict(p) for p in data.get("periods", [])],
            finalized=bool(data.get("finalized", False)),
        )
