"""
Typed failures raised by the game state engine.

Business conditions (a period already running, a player already on court, an
unknown id) are reported as subclasses of :class:`CourtsideError` so callers
can branch on the failure kind instead of parsing messages.
"""


class CourtsideError(Exception):
    """Base class for all engine failures."""

    code = "error"


# ---------------------------------------------------------------------------
# State conflicts: the operation is invalid for the current state
# ---------------------------------------------------------------------------
class StateConflict(CourtsideError):
    """Operation rejected because of the current game, period or player state."""

    code = "state_conflict"


class AlreadyOn(StateConflict):
    code = "already_on"

    def __init__(self, player_id: int, period_id: str):
        super().__init__(f"Player {player_id} is already on court in period {period_id}")
        self.player_id = player_id
        self.period_id = period_id


class NotOn(StateConflict):
    code = "not_on"

    def __init__(self, player_id: int, period_id: str):
        super().__init__(f"Player {player_id} is not on court in period {period_id}")
        self.player_id = player_id
        self.period_id = period_id


class PeriodNotRunning(StateConflict):
    code = "period_not_running"

    def __init__(self, game_id: int, period_index=None):
        if period_index is None:
            message = f"Game {game_id} has no running period"
        else:
            message = f"Period {period_index} of game {game_id} is not running"
        super().__init__(message)
        self.game_id = game_id
        self.period_index = period_index


class PeriodAlreadyRunning(StateConflict):
    code = "period_already_running"

    def __init__(self, game_id: int, period_index: int):
        super().__init__(f"Period {period_index} of game {game_id} is still running")
        self.game_id = game_id
        self.period_index = period_index


class GameNotStarted(StateConflict):
    """A period was requested for a game that is not started or already ended."""

    code = "game_not_started"

    def __init__(self, game_id: int):
        super().__init__(f"Game {game_id} is not in progress")
        self.game_id = game_id


class AlreadyStarted(StateConflict):
    code = "already_started"

    def __init__(self, game_id: int):
        super().__init__(f"Game {game_id} has already been started")
        self.game_id = game_id


class AlreadyEnded(StateConflict):
    code = "already_ended"

    def __init__(self, game_id: int):
        super().__init__(f"Game {game_id} has already ended")
        self.game_id = game_id


class NotStarted(StateConflict):
    """An end was requested for a game that never started."""

    code = "not_started"

    def __init__(self, game_id: int):
        super().__init__(f"Game {game_id} was never started")
        self.game_id = game_id


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------
class NotFound(CourtsideError):
    code = "not_found"


class GameNotFound(NotFound):
    def __init__(self, game_id):
        super().__init__(f"Game {game_id} not found")
        self.game_id = game_id


class PlayerNotFound(NotFound):
    def __init__(self, player_id):
        super().__init__(f"Player {player_id} not found")
        self.player_id = player_id


# ---------------------------------------------------------------------------
# Input and storage
# ---------------------------------------------------------------------------
class PlayerValidationError(CourtsideError):
    """Roster edit rejected because the player data is invalid."""

    code = "invalid_player"


class PersistenceFailure(CourtsideError):
    """A store collaborator failed to read or write."""

    code = "persistence_failure"
