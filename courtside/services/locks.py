"""
Per-game critical sections.

Every state-changing operation on a game (start/stop period, sub on/off,
end game) runs while holding that game's lock, so a double-tapped "Stop"
is applied once and the second request sees the updated state. Locks are
keyed by game id; operations on different games never wait on each other.

These are process-local ``threading`` locks. Running several server
processes against one data file is not supported.
"""
from contextlib import contextmanager
from threading import Lock, RLock
from typing import Dict, Iterator


class GameLocks:
    """Registry handing out one re-entrant lock per game id."""

    def __init__(self) -> None:
        self._registry_lock = Lock()
        self._locks: Dict[int, RLock] = {}

    def lock_for(self, game_id: int) -> RLock:
        # Registry lock guards only the map, never a game operation
        with self._registry_lock:
            lock = self._locks.get(game_id)
            if lock is None:
                lock = RLock()
                self._locks[game_id] = lock
            return lock

    @contextmanager
    def hold(self, game_id: int) -> Iterator[None]:
        """
        Serialize a critical section for one game.

        Usage:
            with locks.hold(game_id):
                ...  # load, mutate, save
        """
        lock = self.lock_for(game_id)
        lock.acquire()
        try:
            yield
        finally:
            lock.release()
